"""
ScatterBrain Backend - Label SQLAlchemy Model
=============================================

What:  ORM model representing the `label` table.
How:   Integer primary key assigned by the database (SERIAL on PostgreSQL,
       INTEGER PRIMARY KEY rowid alias on SQLite), so ids grow monotonically.
"""

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from scatterbrain.database import Base


class Label(Base):
    """A reusable categorical tag with a color code and a description."""

    __tablename__ = "label"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Color code such as "#fff"; presence is the only requirement.
    hex: Mapped[str] = mapped_column(Text, nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Label(id={self.id}, hex={self.hex!r})>"
