"""
Handler Layer for the Conference API

Application layer between the HTTP edge and the table store. Each collection
has its own subdirectory with a read API (queries.py) and a write API
(commands.py).

Architecture:
api/ (HTTP edge) -> handlers/ (this layer) -> core/ (TableGateway) -> DynamoDB
handlers/ (this layer) <- models/ (domain models, DTOs, views)
"""

from .schedule.queries import ScheduleReadApi
from .schedule.commands import ScheduleWriteApi
from .speakers.queries import SpeakerReadApi
from .speakers.commands import SpeakerWriteApi

__all__ = [
    'ScheduleReadApi',
    'ScheduleWriteApi',
    'SpeakerReadApi',
    'SpeakerWriteApi',
]
