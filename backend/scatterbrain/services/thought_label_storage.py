"""
ScatterBrain Backend - Thought/Label Association Storage
========================================================

What:  Attach labels to existing thoughts and read them back joined.
How:   No existence or uniqueness checks happen here; the table's foreign
       keys and composite primary key reject bad or duplicate links, which
       surface as StorageError(INTERNAL).
"""

import logging
import uuid
from typing import List

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError

from scatterbrain.database import session_scope
from scatterbrain.identifiers import format_thought_id
from scatterbrain.models.label import Label
from scatterbrain.models.thought import Thought
from scatterbrain.models.thought_label import ThoughtLabel
from scatterbrain.schemas.label import LabelResponse
from scatterbrain.schemas.thought import (
    ThoughtLabelLink,
    ThoughtResponse,
    ThoughtWithLabelsResponse,
)
from scatterbrain.services.base_storage import BaseStorage

logger = logging.getLogger(__name__)


class ThoughtLabelStorage(BaseStorage):
    table = ThoughtLabel.__table__

    async def add_label_to_thought(self, thought_id: uuid.UUID, label_id: int) -> ThoughtLabelLink:
        """
        Insert one association row.

        Raises:
            StorageError(INTERNAL): the insert failed (unknown thought or
            label, duplicate link, or a driver error).
        """
        try:
            async with session_scope(self._sessions) as session:
                await session.execute(
                    insert(ThoughtLabel).values(thought_id=thought_id, label_id=label_id)
                )
        except SQLAlchemyError as e:
            raise self._internal_error(
                "add_label_to_thought",
                e,
                thought_id=format_thought_id(thought_id),
                label_id=label_id,
            ) from e

        logger.info("Label %d attached to thought %s", label_id, format_thought_id(thought_id))
        return ThoughtLabelLink(thought_id=thought_id, label_id=label_id)

    async def get_thought_labels(self, thought_id: uuid.UUID) -> List[ThoughtWithLabelsResponse]:
        """
        One entry per label attached to the thought, ordered by label id.

        Returns [] when the thought has no labels or does not exist.
        """
        stmt = (
            select(Thought, Label)
            .join(ThoughtLabel, ThoughtLabel.thought_id == Thought.id)
            .join(Label, Label.id == ThoughtLabel.label_id)
            .where(Thought.id == thought_id)
            .order_by(Label.id)
        )
        try:
            async with session_scope(self._sessions) as session:
                rows = (await session.execute(stmt)).all()
        except SQLAlchemyError as e:
            raise self._internal_error(
                "get_thought_labels", e, thought_id=format_thought_id(thought_id)
            ) from e

        return [
            ThoughtWithLabelsResponse(
                thought=ThoughtResponse.model_validate(thought),
                labels=LabelResponse.model_validate(label),
            )
            for thought, label in rows
        ]
