"""
ScatterBrain Backend - Thought SQLAlchemy Model
===============================================

What:  ORM model representing the `thought` table.
Who:   Used by ThoughtStorage for CRUD and by ThoughtLabelStorage for joins.

Table Design:
    - id: UUID primary key, generated by the application (identifiers.py)
    - title: NOT NULL text
    - content: free text
    - create_time / update_time: naive UTC timestamps written with the
      database clock (see database.utcnow)

Lifecycle:
    1. Inserted by add_thought / add_thought_with_label, both timestamps equal
    2. update_thought rewrites title, content and update_time
    3. Never deleted
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from scatterbrain.database import Base


class Thought(Base):
    """A title + content note, the primary persisted entity."""

    __tablename__ = "thought"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    create_time: Mapped[datetime] = mapped_column(DateTime(timezone=False))

    update_time: Mapped[datetime] = mapped_column(DateTime(timezone=False))

    def __repr__(self) -> str:
        return f"<Thought(id={self.id}, title={self.title!r}, update_time='{self.update_time}')>"
