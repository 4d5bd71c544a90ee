from sqlalchemy import BigInteger, Boolean, DateTime, Text, false
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import datetime
from channel_service.database.base import Base


class Channel(Base):
    """
    SQLAlchemy model for a chat-platform channel registered with the service.

    The row is written once in full by the create operation. Afterwards only
    `suppress` may change; `added_at` and `added_by` are write-once.
    """
    __tablename__ = "channels"

    # Externally assigned platform id (never generated here)
    channel_id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=False,
    )

    channel_name: Mapped[str] = mapped_column(Text, nullable=False)

    # Owning guild (server) on the chat platform
    guild_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    guild_name: Mapped[str] = mapped_column(Text, nullable=False)

    # Server time of the insert
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Platform id of the user who registered the channel
    added_by: Mapped[int] = mapped_column(BigInteger, nullable=False)

    suppress: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=false(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Channel(channel_id={self.channel_id!r}, channel_name={self.channel_name!r}, suppress={self.suppress!r})>"
