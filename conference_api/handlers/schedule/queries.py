"""
Schedule Read API

Read operations for sessions. The schedule is small and always read whole,
so every operation is a paginated full-table scan; sessions are ordered by
parsed start time with unparsable start times last.
"""

import logging
from typing import List

from ...config import SiteConfig
from ...core import create_table_gateway
from ...models import Session, SessionView
from ...utils.csv_codec import build_csv
from ...utils.timezone import start_time_sort_key

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ['sessionId', 'videoId', 'title', 'description', 'url', 'startTime', 'duration']
EXPORT_FILENAME = "schedule-export.csv"


class ScheduleReadApi:
    """Read-only API for the session table."""

    def __init__(self, config: SiteConfig):
        """Initialize read API with configuration."""
        self.config = config
        self.gateway = create_table_gateway(config, config.schedule_table)

    def scan_sessions(self) -> List[Session]:
        """All stored sessions in table order."""
        return [Session.from_table_item(item) for item in self.gateway.scan_all()]

    def list_sessions(self) -> List[SessionView]:
        """
        List the whole schedule ordered by start time.

        DynamoDB Operation: Scan (all pages)

        Returns:
            Public session views; the sort is stable, so sessions with equal
            or unparsable start times keep their scan order
        """
        sessions = sorted(self.scan_sessions(), key=lambda s: start_time_sort_key(s.start_time))
        logger.debug(f"Listed {len(sessions)} session(s)")
        return [SessionView.from_session(session) for session in sessions]

    def export_csv(self) -> str:
        """
        Export the schedule as CSV.

        Columns are sessionId, videoId, title, description, url, startTime and
        duration; fields are escaped with spreadsheet formula protection.

        Returns:
            CSV text with a header row and '\\n' line endings
        """
        views = self.list_sessions()
        rows = [
            [
                view.session_id,
                view.video_id,
                view.title,
                view.description,
                view.url,
                view.start_time,
                view.duration
            ]
            for view in views
        ]
        logger.info(f"Exported {len(rows)} session(s) to CSV")
        return build_csv(EXPORT_COLUMNS, rows)
