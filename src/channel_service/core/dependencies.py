from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from channel_service.database.session import get_async_session
from channel_service.repositories.channel_repository import ChannelRepository


async def get_channel_repository(
    db: AsyncSession = Depends(get_async_session),
) -> ChannelRepository:
    # One repository per request, bound to that request's session
    return ChannelRepository(db)
