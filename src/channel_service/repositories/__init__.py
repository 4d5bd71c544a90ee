"""
Repository layer: the only code that talks to the database.

Usage:
    from channel_service.repositories import ChannelRepository
"""

from .base_repository import BaseRepository
from .channel_repository import ChannelRepository

__all__ = [
    "BaseRepository",
    "ChannelRepository",
]
