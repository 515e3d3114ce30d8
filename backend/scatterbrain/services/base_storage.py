"""
ScatterBrain Backend - Storage Base Class
=========================================

What:  Shared plumbing for the three storage components.
How:   Each storage holds the session factory shared across the process,
       creates only its own table during `initialize()`, and converts
       driver failures into `StorageError(kind=INTERNAL)`.
"""

import logging
from typing import Any, ClassVar

from sqlalchemy import Table
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from scatterbrain.database import session_scope
from scatterbrain.exceptions import ErrorKind, StorageError

logger = logging.getLogger(__name__)


class BaseStorage:
    """
    Base for ThoughtStorage, LabelStorage and ThoughtLabelStorage.

    Subclasses set `table` to the SQLAlchemy Table they own.
    """

    table: ClassVar[Table]

    def __init__(self, sessions: async_sessionmaker[AsyncSession]):
        self._sessions = sessions

    async def initialize(self) -> None:
        """
        Idempotently create this component's table (CREATE IF NOT EXISTS).

        Raises:
            SQLAlchemyError: DDL failed. Not wrapped: startup must abort.
        """
        async with session_scope(self._sessions) as session:
            conn = await session.connection()
            await conn.run_sync(self.table.create, checkfirst=True)
        logger.info("Schema ready: %s", self.table.name)

    def _internal_error(
        self, operation: str, exc: SQLAlchemyError, **context: Any
    ) -> StorageError:
        """Log a driver failure with context and build the error to raise."""
        logger.error(
            "%s failed on %s: %s | Context: %s",
            operation,
            self.table.name,
            exc,
            context,
        )
        return StorageError(
            ErrorKind.INTERNAL,
            context={"operation": operation, "error_type": type(exc).__name__, **context},
        )
