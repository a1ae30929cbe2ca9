"""
Schedule Read/Write APIs

Usage:
    from .queries import ScheduleReadApi
    from .commands import ScheduleWriteApi

    read_api = ScheduleReadApi(config)
    write_api = ScheduleWriteApi(config)
"""

from .queries import ScheduleReadApi
from .commands import ScheduleWriteApi

__all__ = [
    "ScheduleReadApi",
    "ScheduleWriteApi",
]
