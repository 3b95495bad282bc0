"""Status reports for event recordings."""

from importlib import metadata

from .catalog import EventTypeCatalog
from .check import ReportBuilder, Report, check_recordings, project_settings, render_general, render_settings
from .config import (
    build_state,
    load_state,
    load_state_config,
    validate_state_config,
    validate_state_file,
)
from .errors import ConfigError, NotFoundError, RecordingCheckError
from .formatting import format_bytes, format_timespan, parse_timespan
from .models import EventType, Recording, RecordingState, SettingDescriptor, SettingKey
from .registry import InMemoryRecordingRegistry, RecordingRegistry, SQLiteRecordingRegistry
from .service import create_app

try:
    __version__ = metadata.version("recording-check")
except metadata.PackageNotFoundError:  # pragma: no cover - fallback for editable installs
    __version__ = "0.1.0"

__all__ = [
    "ReportBuilder",
    "Report",
    "check_recordings",
    "project_settings",
    "render_general",
    "render_settings",
    "EventTypeCatalog",
    "RecordingRegistry",
    "InMemoryRecordingRegistry",
    "SQLiteRecordingRegistry",
    "Recording",
    "RecordingState",
    "SettingKey",
    "EventType",
    "SettingDescriptor",
    "format_bytes",
    "format_timespan",
    "parse_timespan",
    "load_state",
    "load_state_config",
    "build_state",
    "validate_state_config",
    "validate_state_file",
    "RecordingCheckError",
    "NotFoundError",
    "ConfigError",
    "create_app",
    "__version__",
]
