r"""
Centralized access to the database models of the service.

    from channel_service.models import Channel
"""

from .channel import Channel

__all__ = [
    "Channel",
]
