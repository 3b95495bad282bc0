"""Loading and validation of recording state snapshots."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml
from pydantic import ValidationError

from .catalog import EventTypeCatalog
from .errors import ConfigError
from .formatting import parse_timespan
from .models import EventType, Recording, RecordingState, SettingKey
from .models.recording import SETTING_SEPARATOR
from .registry import InMemoryRecordingRegistry

RECORDING_DEFAULTS: Dict[str, Any] = {"state": "new", "max_size": 0, "settings": {}}
_STATES = {state.value for state in RecordingState}


@dataclass
class ValidationResult:
    errors: list[str]
    warnings: list[str]
    normalized: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return not self.errors

    def as_dict(self) -> Dict[str, Any]:
        return {
            "errors": self.errors,
            "warnings": self.warnings,
            "normalized": self.normalized,
        }


@dataclass
class StateSnapshot:
    """Recordings and event types described by one state file."""

    registry: InMemoryRecordingRegistry
    catalog: EventTypeCatalog


def _setting_name(entry: Any) -> str | None:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping) and isinstance(entry.get("name"), str):
        return entry["name"]
    return None


def _validate_event_types(
    entries: Any, errors: list[str], warnings: list[str]
) -> tuple[list[Any], Dict[str, set[str]]]:
    if not isinstance(entries, list):
        errors.append("'event_types' must be a list")
        return [], {}

    declared: Dict[str, set[str]] = {}
    normalized: list[Any] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            errors.append(f"event_types[{index}] must be a mapping")
            continue
        name = entry.get("name")
        if not isinstance(name, str) or not name.strip():
            errors.append(f"event_types[{index}] is missing required field 'name'")
            continue
        if name in declared:
            errors.append(f"Duplicate event type '{name}'")
            continue
        if SETTING_SEPARATOR in name:
            warnings.append(f"Event type name '{name}' contains '{SETTING_SEPARATOR}'")

        settings = entry.get("settings", [])
        if not isinstance(settings, list):
            errors.append(f"Settings of event type '{name}' must be a list")
            settings = []
        names: set[str] = set()
        for setting in settings:
            setting_name = _setting_name(setting)
            if setting_name is None:
                errors.append(f"Event type '{name}' declares a setting without a name")
                continue
            if SETTING_SEPARATOR in setting_name:
                warnings.append(f"Setting name '{name}.{setting_name}' contains '{SETTING_SEPARATOR}'")
            names.add(setting_name)
        declared[name] = names

        item = dict(entry)
        item.setdefault("label", name)
        normalized.append(item)
    return normalized, declared


def _validate_timespan(value: Any, field: str, label: str, errors: list[str]) -> None:
    if value is None:
        return
    try:
        parse_timespan(value)
    except ValueError as exc:
        errors.append(f"{label}: field '{field}' {exc}")


def _validate_recordings(
    entries: Any, declared: Mapping[str, set[str]], errors: list[str], warnings: list[str]
) -> list[Any]:
    if not isinstance(entries, list):
        errors.append("'recordings' must be a list")
        return []

    seen_ids: set[int] = set()
    normalized: list[Any] = []
    for index, entry in enumerate(entries):
        label = f"recordings[{index}]"
        if not isinstance(entry, Mapping):
            errors.append(f"{label} must be a mapping")
            continue
        item = {**RECORDING_DEFAULTS, **entry}

        recording_id = item.get("id")
        if "id" not in entry:
            errors.append(f"{label} is missing required field 'id'")
        elif isinstance(recording_id, bool) or not isinstance(recording_id, int) or recording_id < 0:
            errors.append(f"{label}: field 'id' must be a non-negative integer (got {recording_id!r})")
        elif recording_id in seen_ids:
            errors.append(f"Duplicate recording id {recording_id}")
        else:
            seen_ids.add(recording_id)

        if not isinstance(item.get("name"), str):
            errors.append(f"{label} is missing required field 'name'")

        state = item.get("state")
        if not isinstance(state, str) or state.strip().upper() not in _STATES:
            errors.append(f"{label}: unknown state {state!r}")

        max_size = item.get("max_size")
        if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size < 0:
            errors.append(f"{label}: field 'max_size' must be a non-negative integer (got {max_size!r})")

        _validate_timespan(item.get("duration"), "duration", label, errors)
        _validate_timespan(item.get("max_age"), "max_age", label, errors)

        settings = item.get("settings") or {}
        if not isinstance(settings, Mapping):
            errors.append(f"{label}: field 'settings' must be a mapping")
            settings = {}
        for raw_key in settings:
            try:
                key = SettingKey.parse(str(raw_key))
            except ValueError as exc:
                errors.append(f"{label}: {exc}")
                continue
            if key.setting not in declared.get(key.event_type, ()):
                warnings.append(f"{label}: setting '{key}' is not declared by any event type")

        normalized.append(item)
    return normalized


def validate_state_config(config: Mapping[str, Any]) -> ValidationResult:
    """Validate a state snapshot mapping.

    Validation does not mutate ``config``. Defaults are applied to the
    normalized copy; settings that no event type declares are reported as
    warnings since reports simply skip them.
    """

    errors: list[str] = []
    warnings: list[str] = []
    if not isinstance(config, Mapping):
        return ValidationResult(errors=["State snapshot must be a mapping/object"], warnings=[], normalized={})

    event_types, declared = _validate_event_types(config.get("event_types") or [], errors, warnings)
    recordings = _validate_recordings(config.get("recordings") or [], declared, errors, warnings)

    normalized = {**config, "event_types": event_types, "recordings": recordings}
    return ValidationResult(errors=errors, warnings=warnings, normalized=normalized)


def load_state_config(path: str | Path) -> Dict[str, Any]:
    """Load a state snapshot from YAML or JSON."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"State file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            loaded = json.loads(text)
        else:
            loaded = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not parse state file {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError("State file must contain a mapping/object")
    return loaded


def validate_state_file(path: str | Path) -> ValidationResult:
    return validate_state_config(load_state_config(path))


def build_state(config: Mapping[str, Any]) -> StateSnapshot:
    """Turn a validated snapshot mapping into a registry and a catalog."""

    validation = validate_state_config(config)
    if not validation.ok:
        raise ConfigError("Invalid state snapshot", validation.errors)

    try:
        event_types: List[EventType] = [
            EventType.model_validate(entry) for entry in validation.normalized["event_types"]
        ]
        recordings: List[Recording] = [
            Recording.model_validate(entry) for entry in validation.normalized["recordings"]
        ]
    except ValidationError as exc:
        raise ConfigError("Invalid state snapshot", [str(exc)]) from exc

    return StateSnapshot(
        registry=InMemoryRecordingRegistry(recordings),
        catalog=EventTypeCatalog(event_types),
    )


def load_state(path: str | Path) -> StateSnapshot:
    """Load, validate and build the state snapshot stored at ``path``."""

    return build_state(load_state_config(path))
