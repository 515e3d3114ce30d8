"""
ScatterBrain Backend - Thought/Label Route Handlers
===================================================

What:  Attach labels to thoughts, create a thought together with a label, and
       list the labels of one thought.

    PUT  /api/thought-labels         201 echoed link   | 400 | 500
    POST /api/thought-labels         201 "thought created" | 400 | 500
    GET  /api/thoughts/{id}/labels   200 list          | 400 | 500

The compound POST is all-or-nothing: a 500 means neither the thought nor
its association was stored.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from scatterbrain.identifiers import parse_thought_id
from scatterbrain.routes import get_processor
from scatterbrain.schemas.thought import (
    ErrorResponse,
    ThoughtLabelLink,
    ThoughtWithLabelCreate,
    ThoughtWithLabelsResponse,
)
from scatterbrain.services.processor import ThoughtProcessor

router = APIRouter(prefix="/api", tags=["Thought Labels"])

THOUGHT_CREATED = "thought created"


@router.put(
    "/thought-labels",
    status_code=status.HTTP_201_CREATED,
    response_model=ThoughtLabelLink,
    responses={
        400: {"description": "Body could not be decoded", "model": ErrorResponse},
        500: {"description": "Unknown thought/label or duplicate link", "model": ErrorResponse},
    },
    summary="Attach a label to an existing thought",
)
async def attach_label(
    body: ThoughtLabelLink,
    processor: ThoughtProcessor = Depends(get_processor),
) -> ThoughtLabelLink:
    return await processor.thought_label_storage.add_label_to_thought(
        body.thought_id, body.label_id
    )


@router.post(
    "/thought-labels",
    status_code=status.HTTP_201_CREATED,
    response_class=PlainTextResponse,
    responses={
        400: {"description": "Body could not be decoded", "model": ErrorResponse},
        500: {"description": "Nothing was stored", "model": ErrorResponse},
    },
    summary="Create a thought with a label in one transaction",
)
async def create_thought_with_label(
    body: ThoughtWithLabelCreate,
    processor: ThoughtProcessor = Depends(get_processor),
) -> PlainTextResponse:
    await processor.thought_storage.add_thought_with_label(
        body.title, body.content, body.label_id
    )
    return PlainTextResponse(THOUGHT_CREATED, status_code=status.HTTP_201_CREATED)


@router.get(
    "/thoughts/{thought_id}/labels",
    response_model=List[ThoughtWithLabelsResponse],
    responses={
        400: {"description": "Malformed identifier", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the labels attached to a thought",
)
async def list_thought_labels(
    thought_id: str,
    processor: ThoughtProcessor = Depends(get_processor),
) -> List[ThoughtWithLabelsResponse]:
    return await processor.thought_label_storage.get_thought_labels(
        parse_thought_id(thought_id)
    )
