"""
Lambda handler for /api/schedule/{action}: the path-based export and import routes.

    GET  /api/schedule/export
    POST /api/schedule/import
"""

import logging

from .responses import error_response, get_method, get_path, get_path_param, run_operation
from .schedule import export_schedule, import_schedule

logger = logging.getLogger(__name__)

UNKNOWN_ACTION = "Unknown action. Use /api/schedule/export or /api/schedule/import"


def _get_action(event) -> str:
    action = get_path_param(event, "action")
    if action:
        return action.lower()
    return get_path(event).rstrip("/").rsplit("/", 1)[-1].lower()


def lambda_handler(event, context):
    """Serve CSV export and import under their own paths."""
    method = get_method(event)
    action = _get_action(event)

    if action == "export" and method == "GET":
        return run_operation("export schedule", export_schedule, event)
    if action == "import" and method == "POST":
        return run_operation("import schedule", import_schedule, event)

    logger.info(f"Unknown schedule IO route: {method} {action}")
    return error_response(404, UNKNOWN_ACTION)
