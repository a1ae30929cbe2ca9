"""
Lambda handler for /api/schedule and /api/schedule/{id}.

Routes:
    GET    /api/schedule                    public schedule
    GET    /api/schedule?format=csv         CSV export
    POST   /api/schedule                    create session
    POST   /api/schedule?action=import      CSV import
    POST   /api/schedule?action=playlist    YouTube playlist import
    PUT    /api/schedule/{id}               partial update
    DELETE /api/schedule/{id}               delete
"""

import logging
from typing import Any, Dict

from ..handlers.schedule.queries import EXPORT_FILENAME
from ..models import PlaylistImportRequest, SessionCreate, SessionUpdate, parse_dto
from .context import get_config, get_schedule_read_api, get_schedule_write_api
from .responses import (
    csv_response,
    error_response,
    get_method,
    get_path_param,
    get_query_param,
    get_raw_body,
    json_response,
    parse_json_body,
    run_operation,
)

logger = logging.getLogger(__name__)


def get_schedule(event: Dict[str, Any]) -> Dict[str, Any]:
    sessions = get_schedule_read_api().list_sessions()
    return json_response(200, {
        "timezone": get_config().site_timezone,
        "schedule": [session.to_response() for session in sessions],
    })


def export_schedule(event: Dict[str, Any]) -> Dict[str, Any]:
    return csv_response(get_schedule_read_api().export_csv(), EXPORT_FILENAME)


def create_session(event: Dict[str, Any]) -> Dict[str, Any]:
    session_data = parse_dto(SessionCreate, parse_json_body(event))
    session = get_schedule_write_api().create_session(session_data)
    return json_response(201, {
        "message": "Schedule item created",
        "id": session.session_id,
        "sessionId": session.session_id,
    })


def import_schedule(event: Dict[str, Any]) -> Dict[str, Any]:
    body = get_raw_body(event)
    logger.info(f"CSV import received, content length: {len(body)}")
    result = get_schedule_write_api().import_csv(body)
    return json_response(200, result.to_response())


def import_playlist(event: Dict[str, Any]) -> Dict[str, Any]:
    request = parse_dto(PlaylistImportRequest, parse_json_body(event))
    result = get_schedule_write_api().import_playlist(request)
    return json_response(200, result.to_response())


def update_session(event: Dict[str, Any], session_id: str) -> Dict[str, Any]:
    updates = parse_dto(SessionUpdate, parse_json_body(event))
    get_schedule_write_api().update_session(session_id, updates)
    return json_response(200, {"message": "Schedule item updated"})


def delete_session(event: Dict[str, Any], session_id: str) -> Dict[str, Any]:
    get_schedule_write_api().delete_session(session_id)
    return json_response(200, {"message": "Schedule item deleted"})


def lambda_handler(event, context):
    """Route a schedule request by method, path id and query parameters."""
    method = get_method(event)
    session_id = get_path_param(event, "id")
    output_format = get_query_param(event, "format", "Format")
    action = get_query_param(event, "action", "Action")
    logger.debug(f"{method} schedule request: id={session_id} format={output_format} action={action}")

    if method == "GET":
        if output_format == "csv":
            return run_operation("export schedule", export_schedule, event)
        return run_operation("fetch schedule", get_schedule, event)

    if method == "POST":
        if action == "import":
            return run_operation("import schedule", import_schedule, event)
        if action == "playlist":
            return run_operation("import playlist", import_playlist, event)
        return run_operation("add schedule item", create_session, event)

    if method == "PUT":
        if not session_id:
            return error_response(400, "ID required for update")
        return run_operation("update schedule item", update_session, event, session_id)

    if method == "DELETE":
        if not session_id:
            return error_response(400, "ID required for delete")
        return run_operation("delete schedule item", delete_session, event, session_id)

    return error_response(405, "Method not allowed")
