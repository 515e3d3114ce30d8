"""
ScatterBrain Backend - Thought Route Handlers
============================================

What:  Create, list, fetch and update thoughts.
How:   Path identifiers are parsed explicitly with `parse_thought_id`
       (malformed → 400); bodies are validated by FastAPI against the schemas
       (malformed → 400 via the handler in main.py).

Status mapping:
    POST /api/thoughts        201 | 400 decode | 500 store
    GET  /api/thoughts        200 | 500 store
    GET  /api/thoughts/{id}   200 | 400 bad id | 404 not found | 500 store
    PUT  /api/thoughts/{id}   204 | 400 bad id/body | 404 no row | 500 store
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from scatterbrain.identifiers import parse_thought_id
from scatterbrain.routes import get_processor
from scatterbrain.schemas.thought import (
    ErrorResponse,
    ThoughtCreate,
    ThoughtResponse,
    ThoughtUpdate,
)
from scatterbrain.services.processor import ThoughtProcessor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Thoughts"])


@router.post(
    "/thoughts",
    status_code=status.HTTP_201_CREATED,
    response_model=ThoughtResponse,
    responses={
        400: {"description": "Body could not be decoded", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a thought",
)
async def create_thought(
    body: ThoughtCreate,
    processor: ThoughtProcessor = Depends(get_processor),
) -> ThoughtResponse:
    logger.info("Adding a new thought to the system.")
    return await processor.thought_storage.add_thought(body.title, body.content)


@router.get(
    "/thoughts",
    response_model=List[ThoughtResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all thoughts",
)
async def list_thoughts(
    processor: ThoughtProcessor = Depends(get_processor),
) -> List[ThoughtResponse]:
    return await processor.thought_storage.get_all_thoughts()


@router.get(
    "/thoughts/{thought_id}",
    response_model=ThoughtResponse,
    responses={
        400: {"description": "Malformed identifier", "model": ErrorResponse},
        404: {"description": "Thought not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single thought by ID",
)
async def get_thought(
    thought_id: str,
    processor: ThoughtProcessor = Depends(get_processor),
) -> ThoughtResponse:
    return await processor.thought_storage.get_thought(parse_thought_id(thought_id))


@router.put(
    "/thoughts/{thought_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Malformed identifier or body", "model": ErrorResponse},
        404: {"description": "No thought with this ID", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace a thought's title and content",
)
async def update_thought(
    thought_id: str,
    body: ThoughtUpdate,
    processor: ThoughtProcessor = Depends(get_processor),
) -> Response:
    await processor.thought_storage.update_thought(
        parse_thought_id(thought_id), body.title, body.content
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
