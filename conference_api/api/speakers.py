"""
Lambda handler for /api/speakers, /api/speakers/{id} and /api/speakers/extract.
"""

import logging
from typing import Any, Dict

from ..models import SpeakerCreate, SpeakerUpdate, SpeakerView, parse_dto
from .context import get_speaker_read_api, get_speaker_write_api
from .responses import (
    error_response,
    get_method,
    get_path,
    get_path_param,
    json_response,
    parse_json_body,
    run_operation,
)

logger = logging.getLogger(__name__)

EXTRACT_ROUTE = "extract"


def list_speakers(event: Dict[str, Any]) -> Dict[str, Any]:
    speakers = get_speaker_read_api().list_speakers()
    return json_response(200, {"speakers": [speaker.to_response() for speaker in speakers]})


def get_speaker(event: Dict[str, Any], speaker_id: str) -> Dict[str, Any]:
    return json_response(200, get_speaker_read_api().get_speaker(speaker_id).to_response())


def create_speaker(event: Dict[str, Any]) -> Dict[str, Any]:
    speaker_data = parse_dto(SpeakerCreate, parse_json_body(event))
    speaker = get_speaker_write_api().create_speaker(speaker_data)
    return json_response(201, {"message": "Speaker created", **SpeakerView.from_speaker(speaker).to_response()})


def update_speaker(event: Dict[str, Any], speaker_id: str) -> Dict[str, Any]:
    updates = parse_dto(SpeakerUpdate, parse_json_body(event))
    speaker = get_speaker_write_api().update_speaker(speaker_id, updates)
    return json_response(200, {"message": "Speaker updated", **SpeakerView.from_speaker(speaker).to_response()})


def delete_speaker(event: Dict[str, Any], speaker_id: str) -> Dict[str, Any]:
    get_speaker_write_api().delete_speaker(speaker_id)
    return json_response(200, {"message": "Speaker deleted", "id": speaker_id})


def extract_speakers(event: Dict[str, Any]) -> Dict[str, Any]:
    result = get_speaker_write_api().extract_from_schedule()
    return json_response(200, result.to_response())


def _is_extract_route(event: Dict[str, Any], speaker_id) -> bool:
    if speaker_id is not None:
        return speaker_id == EXTRACT_ROUTE
    return get_path(event).rstrip("/").endswith(f"/{EXTRACT_ROUTE}")


def lambda_handler(event, context):
    """Route a speaker request by method and path id."""
    method = get_method(event)
    speaker_id = get_path_param(event, "id")
    logger.debug(f"{method} speakers request: id={speaker_id}")

    if method == "GET":
        if speaker_id:
            return run_operation("fetch speaker", get_speaker, event, speaker_id)
        return run_operation("fetch speakers", list_speakers, event)

    if method == "POST":
        if _is_extract_route(event, speaker_id):
            return run_operation("extract speakers", extract_speakers, event)
        if speaker_id:
            return error_response(405, "Method not allowed")
        return run_operation("create speaker", create_speaker, event)

    if method == "PUT":
        if not speaker_id:
            return error_response(400, "ID required for update")
        return run_operation("update speaker", update_speaker, event, speaker_id)

    if method == "DELETE":
        if not speaker_id:
            return error_response(400, "ID required for delete")
        return run_operation("delete speaker", delete_speaker, event, speaker_id)

    return error_response(405, "Method not allowed")
