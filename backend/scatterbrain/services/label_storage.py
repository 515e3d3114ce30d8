"""
ScatterBrain Backend - Label Storage
====================================

What:  Create and list labels. Labels are never updated or deleted.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from scatterbrain.database import session_scope
from scatterbrain.models.label import Label
from scatterbrain.schemas.label import LabelResponse
from scatterbrain.services.base_storage import BaseStorage

logger = logging.getLogger(__name__)


class LabelStorage(BaseStorage):
    table = Label.__table__

    async def add_label(self, hex: str, description: str) -> LabelResponse:
        """
        Insert a label and return it with the id the database assigned.

        Raises:
            StorageError(INTERNAL): the insert failed.
        """
        label = Label(hex=hex, description=description)
        try:
            async with session_scope(self._sessions) as session:
                session.add(label)
                await session.flush()  # Assigns the integer id
        except SQLAlchemyError as e:
            raise self._internal_error("add_label", e, hex=hex) from e

        logger.info("Label created: %d (%s)", label.id, label.hex)
        return LabelResponse.model_validate(label)

    async def get_all_labels(self) -> List[LabelResponse]:
        try:
            async with session_scope(self._sessions) as session:
                result = await session.execute(select(Label))
                labels = result.scalars().all()
        except SQLAlchemyError as e:
            raise self._internal_error("get_all_labels", e) from e

        return [LabelResponse.model_validate(label) for label in labels]
