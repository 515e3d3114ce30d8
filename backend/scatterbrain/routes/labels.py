"""
ScatterBrain Backend - Label Route Handlers
==========================================

    POST /api/labels   201 | 400 decode | 500 store
    GET  /api/labels   200 | 500 store
"""

from typing import List

from fastapi import APIRouter, Depends, status

from scatterbrain.routes import get_processor
from scatterbrain.schemas.label import LabelCreate, LabelResponse
from scatterbrain.schemas.thought import ErrorResponse
from scatterbrain.services.processor import ThoughtProcessor

router = APIRouter(prefix="/api", tags=["Labels"])


@router.post(
    "/labels",
    status_code=status.HTTP_201_CREATED,
    response_model=LabelResponse,
    responses={
        400: {"description": "Body could not be decoded", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a label",
)
async def create_label(
    body: LabelCreate,
    processor: ThoughtProcessor = Depends(get_processor),
) -> LabelResponse:
    return await processor.label_storage.add_label(body.hex, body.description)


@router.get(
    "/labels",
    response_model=List[LabelResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all labels",
)
async def list_labels(
    processor: ThoughtProcessor = Depends(get_processor),
) -> List[LabelResponse]:
    return await processor.label_storage.get_all_labels()
