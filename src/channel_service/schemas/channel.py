"""
Request and response shapes for the /channel resource.

Each operation gets its own structure instead of one shared model with every field
optional:
    - ChannelCreate: everything a new row needs, `suppress` optional.
    - ChannelUpdate: only `suppress` is read; other keys (a full record echoed back
                     from a read, say) are ignored and can never change a column.
    - ChannelData:   what a read returns; only fields that were set are serialized,
                     so `suppress: false` is emitted while an unknown field is omitted.
"""

from pydantic import BaseModel, ConfigDict

from channel_service.validators.field_validators import Int64, NonBlankStr


class ChannelCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    channel_id: Int64
    channel_name: NonBlankStr
    guild_id: Int64
    guild_name: str
    added_by: Int64
    suppress: bool | None = None


class ChannelUpdate(BaseModel):
    """
    Partial update payload. Omitting `suppress` (or sending null) keeps the stored value.
    Any other key is dropped here, so the UPDATE only ever names `suppress`.
    """
    model_config = ConfigDict(extra="ignore")

    suppress: bool | None = None


class ChannelData(BaseModel):
    channel_name: str | None = None
    guild_id: int | None = None
    guild_name: str | None = None
    suppress: bool | None = None


class ErrorMessage(BaseModel):
    """Error body shared by every failing response: {"message": ..., "sqlstate": ...}."""

    message: str
    sqlstate: str | None = None
