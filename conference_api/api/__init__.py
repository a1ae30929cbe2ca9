"""
AWS Lambda entry points behind an API Gateway proxy integration.

- conference_api.api.schedule.lambda_handler:    /api/schedule, /api/schedule/{id}
- conference_api.api.schedule_io.lambda_handler: /api/schedule/export, /api/schedule/import
- conference_api.api.speakers.lambda_handler:    /api/speakers, /api/speakers/{id}, /api/speakers/extract
"""

from .context import configure_logging, reset_clients

__all__ = [
    "configure_logging",
    "reset_clients",
]
