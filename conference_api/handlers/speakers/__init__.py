"""
Speaker Read/Write APIs

Usage:
    from .queries import SpeakerReadApi
    from .commands import SpeakerWriteApi

    read_api = SpeakerReadApi(config)
    write_api = SpeakerWriteApi(config)
"""

from .queries import SpeakerReadApi
from .commands import SpeakerWriteApi

__all__ = [
    "SpeakerReadApi",
    "SpeakerWriteApi",
]
