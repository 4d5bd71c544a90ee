from .channel import ChannelCreate, ChannelUpdate, ChannelData, ErrorMessage

__all__ = ["ChannelCreate", "ChannelUpdate", "ChannelData", "ErrorMessage"]
