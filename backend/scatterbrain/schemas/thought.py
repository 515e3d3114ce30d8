"""
ScatterBrain Backend - Thought Request/Response Schemas
=======================================================

What:  Pydantic models defining the JSON contract for thoughts and
       thought/label associations.
How:   FastAPI validates request bodies against the *Create/*Update models
       (failures become HTTP 400) and serializes responses from the
       *Response models.

Schemas are separate from the SQLAlchemy models: the API exposes
timezone-aware UTC timestamps while the table stores naive UTC values.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from scatterbrain.exceptions import ValidationError
from scatterbrain.identifiers import parse_thought_id
from scatterbrain.schemas.label import LabelResponse


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ThoughtCreate(BaseModel):
    """Body of POST /api/thoughts."""
    title: str = Field(description="Short title of the thought")
    content: str = Field(description="Body text of the thought")


class ThoughtUpdate(BaseModel):
    """Body of PUT /api/thoughts/{id}. The identifier comes from the path."""
    title: str
    content: str


class ThoughtWithLabelCreate(BaseModel):
    """Body of POST /api/thought-labels: a new thought plus one label."""
    title: str
    content: str
    label_id: int = Field(description="Existing label to attach")


class ThoughtLabelLink(BaseModel):
    """
    Body of PUT /api/thought-labels, echoed back on success.

    Example:
        {"thought_id": "5b0c...", "label_id": 3}
    """
    thought_id: uuid.UUID
    label_id: int

    model_config = {"from_attributes": True}

    @field_validator("thought_id", mode="before")
    @classmethod
    def canonical_thought_id(cls, v):
        """Body ids follow the same canonical form as path ids."""
        if isinstance(v, str):
            try:
                return parse_thought_id(v)
            except ValidationError as e:
                raise ValueError(e.message) from e
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ThoughtResponse(BaseModel):
    """
    Full representation of a thought.

    Returned by POST /api/thoughts (201), GET /api/thoughts and
    GET /api/thoughts/{id}.
    """
    id: uuid.UUID = Field(description="Unique thought identifier (UUID v4)")
    title: str
    content: Optional[str] = None
    create_time: datetime = Field(description="When the thought was created (UTC)")
    update_time: datetime = Field(description="When the thought was last changed (UTC)")

    model_config = {"from_attributes": True}

    @field_validator("create_time", "update_time")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Stored timestamps are naive UTC; tag them so clients see an offset."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ThoughtWithLabelsResponse(BaseModel):
    """One thought paired with one of its labels."""
    thought: ThoughtResponse
    labels: LabelResponse


class PingResponse(BaseModel):
    """Fixed liveness payload: {"Status": "pong", "Service": "scatter-brain"}."""
    status: str = Field(default="pong", serialization_alias="Status")
    service: str = Field(default="scatter-brain", serialization_alias="Service")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
