import logging
import time

from sqlalchemy import Boolean, bindparam, func, insert, update
from sqlalchemy.ext.asyncio import AsyncSession

from channel_service.exceptions.mapper import db_error_handler
from channel_service.models.channel import Channel
from channel_service.schemas.channel import ChannelCreate, ChannelUpdate
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ChannelRepository(BaseRepository[Channel]):
    """
    Channel-specific repository.

    Inherits the primary-key read/delete from BaseRepository and adds the two
    writes with channel semantics: a plain INSERT that refuses to overwrite, and
    a single-statement merge UPDATE.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Channel, db)

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, payload: ChannelCreate) -> None:
        """
        Insert one channel row.

        `added_at` is the database server's clock and `suppress` defaults to False.
        A plain INSERT (no upsert): an existing channel_id makes the database reject
        the statement, which surfaces as ConflictError carrying the native sqlstate.

        Raises:
            ConflictError: a row with this channel_id already exists.
            InternalError: any other storage failure.
        """
        logger.debug(
            "repo.channel.create.start",
            extra={"model": self.model_name, "id": payload.channel_id},
        )
        start = time.perf_counter()

        stmt = insert(Channel).values(
            channel_id=payload.channel_id,
            channel_name=payload.channel_name,
            guild_id=payload.guild_id,
            guild_name=payload.guild_name,
            added_at=func.now(),
            added_by=payload.added_by,
            suppress=payload.suppress if payload.suppress is not None else False,
        )

        async with db_error_handler(self.db, self.model_name):
            await self.db.execute(stmt)
            await self.db.commit()

        logger.info(
            "repo.channel.create.success",
            extra={
                "model": self.model_name,
                "id": payload.channel_id,
                "guild_id": payload.guild_id,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update(self, channel_id: int, payload: ChannelUpdate) -> int:
        """
        Merge `payload` into the stored row in one UPDATE statement.

        SET suppress = COALESCE(:suppress, suppress)

        A NULL parameter (field omitted) keeps the stored value; a supplied value
        overwrites it. The decision happens inside the statement, so concurrent
        updates to the same row never interleave a read with a write here.

        An unknown channel_id matches zero rows and is accepted silently.

        Returns:
            Number of rows matched (0 or 1).
        """
        start = time.perf_counter()

        stmt = (
            update(Channel)
            .where(Channel.channel_id == channel_id)
            .values(
                suppress=func.coalesce(
                    bindparam("suppress_value", payload.suppress, type_=Boolean),
                    Channel.suppress,
                )
            )
            .execution_options(synchronize_session=False)
        )

        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(stmt)
            await self.db.commit()

        matched = result.rowcount
        if matched == 0:
            logger.debug(
                "repo.channel.update.no_match",
                extra={"model": self.model_name, "id": channel_id},
            )

        logger.info(
            "repo.channel.update.success",
            extra={
                "model": self.model_name,
                "id": channel_id,
                "fields": sorted(payload.model_fields_set),
                "matched": matched,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return matched
