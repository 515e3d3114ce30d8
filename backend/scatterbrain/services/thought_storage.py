"""
ScatterBrain Backend - Thought Storage
======================================

What:  All SQL against the `thought` table, plus the one compound write that
       also touches `thought_with_labels`.
Who:   Owned by ThoughtProcessor; called by the thought and thought-label
       route handlers.

Timestamps:
    Both timestamps come from the database clock (`database.utcnow`). An insert
    writes create_time and update_time in a single statement so they are
    equal; an update rewrites update_time only.

Compound Insert (add_thought_with_label):
    ┌──────────────┐    ┌──────────────────────┐    ┌──────────┐
    │ INSERT       │───▶│ INSERT               │───▶│ COMMIT   │
    │ thought      │    │ thought_with_labels  │    │          │
    └──────────────┘    └──────────────────────┘    └──────────┘
           │                       │
           └──────── error ────────┴──▶ ROLLBACK (neither row exists)
"""

import logging
import uuid
from typing import List

from sqlalchemy import insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from scatterbrain.database import session_scope, utcnow
from scatterbrain.exceptions import ErrorKind, StorageError
from scatterbrain.identifiers import format_thought_id, new_thought_id
from scatterbrain.models.thought import Thought
from scatterbrain.models.thought_label import ThoughtLabel
from scatterbrain.schemas.thought import ThoughtResponse
from scatterbrain.services.base_storage import BaseStorage

logger = logging.getLogger(__name__)


class ThoughtStorage(BaseStorage):
    """
    CRUD for thoughts.

    Error Handling Strategy:
        Missing rows surface as StorageError with kind NOT_FOUND (reads) or
        NO_ROW_UPDATED (updates). Every SQLAlchemy failure is wrapped as
        kind INTERNAL with the driver error chained.
    """

    table = Thought.__table__

    async def add_thought(self, title: str, content: str) -> ThoughtResponse:
        """
        Insert a new thought with a fresh identifier.

        Returns:
            The stored thought; create_time == update_time.

        Raises:
            StorageError(INTERNAL): the insert failed.
        """
        thought_id = new_thought_id()
        try:
            async with session_scope(self._sessions) as session:
                thought = await self._insert_thought(session, thought_id, title, content)
        except SQLAlchemyError as e:
            raise self._internal_error(
                "add_thought", e, thought_id=format_thought_id(thought_id)
            ) from e

        logger.info("Thought created: %s", format_thought_id(thought_id))
        return ThoughtResponse.model_validate(thought)

    async def add_thought_with_label(
        self, title: str, content: str, label_id: int
    ) -> ThoughtResponse:
        """
        Insert a thought and attach an existing label, atomically.

        Both inserts share one transaction. If either fails (for example the
        label does not exist and the foreign key rejects the association),
        the transaction rolls back and no thought row remains.

        Raises:
            StorageError(INTERNAL): either insert or the commit failed.
        """
        thought_id = new_thought_id()
        try:
            async with session_scope(self._sessions) as session:
                thought = await self._insert_thought(session, thought_id, title, content)
                await session.execute(
                    insert(ThoughtLabel).values(thought_id=thought_id, label_id=label_id)
                )
        except SQLAlchemyError as e:
            raise self._internal_error(
                "add_thought_with_label",
                e,
                thought_id=format_thought_id(thought_id),
                label_id=label_id,
            ) from e

        logger.info(
            "Thought created with label: %s -> %d", format_thought_id(thought_id), label_id
        )
        return ThoughtResponse.model_validate(thought)

    async def update_thought(self, thought_id: uuid.UUID, title: str, content: str) -> None:
        """
        Rewrite title and content and refresh update_time from the database clock.

        Raises:
            StorageError(NO_ROW_UPDATED): no thought has this identifier.
            StorageError(INTERNAL): the update failed.
        """
        stmt = (
            update(Thought)
            .where(Thought.id == thought_id)
            .values(title=title, content=content, update_time=utcnow())
            .execution_options(synchronize_session=False)
        )
        try:
            async with session_scope(self._sessions) as session:
                result = await session.execute(stmt)
                # At least one row must change, otherwise the id is unknown.
                if result.rowcount <= 0:
                    raise StorageError(
                        ErrorKind.NO_ROW_UPDATED,
                        context={"thought_id": format_thought_id(thought_id)},
                    )
        except SQLAlchemyError as e:
            raise self._internal_error(
                "update_thought", e, thought_id=format_thought_id(thought_id)
            ) from e

    async def get_thought(self, thought_id: uuid.UUID) -> ThoughtResponse:
        """
        Fetch one thought by identifier.

        Raises:
            StorageError(NOT_FOUND): no thought has this identifier.
            StorageError(INTERNAL): the query failed.
        """
        try:
            async with session_scope(self._sessions) as session:
                result = await session.execute(select(Thought).where(Thought.id == thought_id))
                thought = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._internal_error(
                "get_thought", e, thought_id=format_thought_id(thought_id)
            ) from e

        if thought is None:
            raise StorageError.not_found("thought", format_thought_id(thought_id))
        return ThoughtResponse.model_validate(thought)

    async def get_all_thoughts(self) -> List[ThoughtResponse]:
        """Every stored thought in store order; an empty store gives []."""
        try:
            async with session_scope(self._sessions) as session:
                result = await session.execute(select(Thought))
                thoughts = result.scalars().all()
        except SQLAlchemyError as e:
            raise self._internal_error("get_all_thoughts", e) from e

        return [ThoughtResponse.model_validate(t) for t in thoughts]

    @staticmethod
    async def _insert_thought(
        session: AsyncSession, thought_id: uuid.UUID, title: str, content: str
    ) -> Thought:
        now = utcnow()
        result = await session.execute(
            insert(Thought)
            .values(
                id=thought_id,
                title=title,
                content=content,
                create_time=now,
                update_time=now,
            )
            .returning(Thought)
        )
        return result.scalar_one()
