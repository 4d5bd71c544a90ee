"""
/channel routes.

Each route validates its input through a pydantic schema, calls exactly one
repository operation, and returns the success status. Failures are raised as
RepositoryError subclasses and turned into responses by error_handlers.py.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from channel_service.core.dependencies import get_channel_repository
from channel_service.repositories.channel_repository import ChannelRepository
from channel_service.schemas.channel import ChannelCreate, ChannelData, ChannelUpdate, ErrorMessage
from channel_service.validators.field_validators import INT64_MAX, INT64_MIN

router = APIRouter(prefix="/channel", tags=["channel"])

ChannelId = Annotated[int, Path(ge=INT64_MIN, le=INT64_MAX, description="Platform channel id")]
Repo = Annotated[ChannelRepository, Depends(get_channel_repository)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={409: {"model": ErrorMessage}, 500: {"model": ErrorMessage}},
)
async def add_channel(payload: ChannelCreate, repo: Repo) -> Response:
    await repo.create(payload)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get(
    "/{channel_id}",
    response_model=ChannelData,
    response_model_exclude_unset=True,
    responses={404: {"model": ErrorMessage}, 500: {"model": ErrorMessage}},
)
async def get_channel(channel_id: ChannelId, repo: Repo) -> ChannelData:
    channel = await repo.get_by_id_or_raise(channel_id)
    return ChannelData(
        channel_name=channel.channel_name,
        guild_id=channel.guild_id,
        guild_name=channel.guild_name,
        suppress=channel.suppress,
    )


@router.put(
    "/{channel_id}",
    response_class=Response,
    responses={409: {"model": ErrorMessage}, 500: {"model": ErrorMessage}},
)
async def update_channel(channel_id: ChannelId, payload: ChannelUpdate, repo: Repo) -> Response:
    # Zero matched rows is not an error for updates
    await repo.update(channel_id, payload)
    return Response(status_code=status.HTTP_200_OK)


@router.delete(
    "/{channel_id}",
    response_class=Response,
    responses={500: {"model": ErrorMessage}},
)
async def delete_channel(channel_id: ChannelId, repo: Repo) -> Response:
    await repo.delete_by_id(channel_id)
    return Response(status_code=status.HTTP_200_OK)
