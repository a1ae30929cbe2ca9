"""
Test helpers for the conference API: moto table setup, stored rows and
API Gateway proxy events.
"""

from .events import api_event, response_json
from .tables import create_key_table, put_session, put_speaker

__all__ = [
    'api_event',
    'response_json',
    'create_key_table',
    'put_session',
    'put_speaker',
]
