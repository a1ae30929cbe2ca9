"""
Per-process state shared by the Lambda handlers.

Configuration and the read/write APIs (and so their boto3 resources) are
created on first use and reused across invocations of a warm Lambda
container. reset_clients() drops them, for tests and config reloads.
"""

import logging
from typing import Any, Dict, Optional

from ..config import SiteConfig
from ..handlers import ScheduleReadApi, ScheduleWriteApi, SpeakerReadApi, SpeakerWriteApi

_PACKAGE_LOGGER = "conference_api"

_config: Optional[SiteConfig] = None
_apis: Dict[str, Any] = {}
_logging_configured = False


def configure_logging(config: SiteConfig) -> None:
    """Set the package log level once per process (DEBUG when debug logging is enabled)."""
    global _logging_configured
    if _logging_configured:
        return
    level = logging.DEBUG if config.enable_debug_logging else logging.INFO
    logging.getLogger(_PACKAGE_LOGGER).setLevel(level)
    _logging_configured = True


def get_config() -> SiteConfig:
    """Process-wide configuration, loaded from the environment on first use."""
    global _config
    if _config is None:
        _config = SiteConfig.from_env()
        configure_logging(_config)
    return _config


def _get_api(api_class):
    name = api_class.__name__
    if name not in _apis:
        _apis[name] = api_class(get_config())
    return _apis[name]


def get_schedule_read_api() -> ScheduleReadApi:
    return _get_api(ScheduleReadApi)


def get_schedule_write_api() -> ScheduleWriteApi:
    return _get_api(ScheduleWriteApi)


def get_speaker_read_api() -> SpeakerReadApi:
    return _get_api(SpeakerReadApi)


def get_speaker_write_api() -> SpeakerWriteApi:
    return _get_api(SpeakerWriteApi)


def reset_clients(config: Optional[SiteConfig] = None) -> None:
    """Drop cached APIs; the next request rebuilds them from ``config`` (or the environment)."""
    global _config, _logging_configured
    _apis.clear()
    _config = config
    _logging_configured = False
    if config is not None:
        configure_logging(config)
