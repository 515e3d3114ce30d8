"""
ScatterBrain Backend - Thought Processor (Storage Facade)
=========================================================

What:  Aggregates the three storage components over one shared engine and
       runs their schema initialization once at startup.
Who:   Built by the application lifespan (or injected by tests) and handed to
       the route handlers through `create_app(processor)`.

Initialization order follows the foreign keys: thought and label tables
first, then thought_with_labels which references both.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from scatterbrain.config import Settings, settings as default_settings
from scatterbrain.database import build_engine, build_session_factory
from scatterbrain.services.label_storage import LabelStorage
from scatterbrain.services.thought_label_storage import ThoughtLabelStorage
from scatterbrain.services.thought_storage import ThoughtStorage

logger = logging.getLogger(__name__)


class ThoughtProcessor:
    """
    Facade holding one instance of each storage component.

    Attributes:
        thought_storage:       Thoughts, including the compound thought+label insert
        label_storage:         Labels
        thought_label_storage: Thought/label associations
    """

    def __init__(
        self,
        thought_storage: ThoughtStorage,
        label_storage: LabelStorage,
        thought_label_storage: ThoughtLabelStorage,
        engine: Optional[AsyncEngine] = None,
    ):
        self.thought_storage = thought_storage
        self.label_storage = label_storage
        self.thought_label_storage = thought_label_storage
        self._engine = engine

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "ThoughtProcessor":
        """Compose all storage components over one session factory."""
        sessions = build_session_factory(engine)
        return cls(
            thought_storage=ThoughtStorage(sessions),
            label_storage=LabelStorage(sessions),
            thought_label_storage=ThoughtLabelStorage(sessions),
            engine=engine,
        )

    @classmethod
    def from_url(
        cls,
        database_url: Optional[str] = None,
        config: Settings = default_settings,
    ) -> "ThoughtProcessor":
        """Build the engine from `config` (or an explicit URL) and compose."""
        return cls.from_engine(build_engine(database_url, config))

    async def init(self) -> None:
        """
        Create every table that does not exist yet.

        Raises:
            Any DDL or connection error. Callers treat it as fatal.
        """
        await self.thought_storage.initialize()
        await self.label_storage.initialize()
        await self.thought_label_storage.initialize()
        logger.info("Successfully initialized the processor.")

    async def close(self) -> None:
        """Dispose the connection pool, if this processor owns one."""
        if self._engine is not None:
            await self._engine.dispose()
