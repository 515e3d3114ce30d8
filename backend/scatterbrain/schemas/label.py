"""
ScatterBrain Backend - Label Schemas
====================================

What:  Pydantic models for POST /api/labels and label listings.
"""

from typing import Optional

from pydantic import BaseModel, Field


class LabelCreate(BaseModel):
    """Body of POST /api/labels."""
    hex: str = Field(description="Color code, e.g. '#fff'")
    description: str


class LabelResponse(BaseModel):
    """A stored label including its database-assigned integer id."""
    id: int
    hex: str
    description: Optional[str] = None

    model_config = {"from_attributes": True}
