"""
Base repository class providing primary-key operations.

Repositories wrap one `AsyncSession` (injected per request) and run exactly one
statement per public method, inside `db_error_handler`, so every storage failure
is classified once, at this boundary.
"""
import logging
import time
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import delete, inspect as sa_inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from channel_service.database.base import Base
from channel_service.exceptions.base import NotFoundError
from channel_service.exceptions.mapper import db_error_handler

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository keyed on a single-column primary key.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (not an instance), e.g. Channel.
            db: The async session for the current request.
        """
        self.model = model
        self.db = db

        primary_key = sa_inspect(model).primary_key
        if len(primary_key) != 1:
            raise TypeError(f"{model.__name__} must have exactly one primary key column")
        self.pk_column = primary_key[0]

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def get_by_id(self, entity_id: Any) -> ModelType | None:
        """
        Get an entity by its primary key, or None when no row matches.
        """
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(
                select(self.model)
                .where(self.pk_column == entity_id)
                .execution_options(populate_existing=True)
            )
            entity = result.scalar_one_or_none()

        logger.debug(
            "repo.get_by_id",
            extra={"model": self.model_name, "id": entity_id, "found": entity is not None},
        )
        return entity

    async def get_by_id_or_raise(self, entity_id: Any) -> ModelType:
        """
        Get an entity by its primary key.

        Raises:
            NotFoundError: "Could not find <id>" when no row matches.
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            logger.info(
                "repo.get_by_id.not_found",
                extra={"model": self.model_name, "id": entity_id},
            )
            raise NotFoundError(f"Could not find {entity_id}")
        return entity

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def delete_by_id(self, entity_id: Any) -> bool:
        """
        Delete the row with this primary key if present.

        Idempotent: deleting a missing id is not an error.

        Returns:
            True if a row was removed, False if none matched.
        """
        start = time.perf_counter()

        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(
                delete(self.model)
                .where(self.pk_column == entity_id)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()

        deleted = result.rowcount > 0
        logger.info(
            "repo.delete.success",
            extra={
                "model": self.model_name,
                "id": entity_id,
                "deleted": deleted,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return deleted
