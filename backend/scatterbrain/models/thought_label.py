"""
ScatterBrain Backend - Thought/Label Association Model
======================================================

What:  ORM model for the `thought_with_labels` link table.

Constraints:
    - Composite primary key (thought_id, label_id): the same label cannot be
      attached to the same thought twice.
    - Foreign keys to thought.id and label.id: an association can never point
      at a missing row. This is what makes a bad label_id fail the compound
      thought+label insert and roll the thought back with it.
"""

import uuid

from sqlalchemy import ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from scatterbrain.database import Base
from scatterbrain.models.label import Label
from scatterbrain.models.thought import Thought


class ThoughtLabel(Base):
    """Records that a label applies to a thought."""

    __tablename__ = "thought_with_labels"

    thought_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey(Thought.id),
        primary_key=True,
    )

    label_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(Label.id),
        primary_key=True,
        autoincrement=False,
    )

    def __repr__(self) -> str:
        return f"<ThoughtLabel(thought_id={self.thought_id}, label_id={self.label_id})>"
