from __future__ import annotations

import json
from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from recording_check import (
    ConfigError,
    EventType,
    Recording,
    RecordingState,
    SettingKey,
    build_state,
    check_recordings,
    load_state,
    load_state_config,
    validate_state_config,
)

STATE_YAML = """
event_types:
  - name: jdk.CPULoad
    label: CPU Load
    settings: [enabled, period]
  - name: jdk.GarbageCollection
    settings:
      - name: threshold
        label: Threshold
      - enabled
recordings:
  - id: 1
    name: startup
    state: running
    duration: 60s
    max_size: 262144000
    settings:
      "jdk.CPULoad#period": "1 s"
      "jdk.GarbageCollection#enabled": true
  - id: 2
    name: continuous
    max_age: 1d
"""


def test_load_state_config_reads_yaml(tmp_path: Path) -> None:
    path = tmp_path / "state.yml"
    path.write_text(STATE_YAML, encoding="utf-8")

    config = load_state_config(path)

    assert [r["name"] for r in config["recordings"]] == ["startup", "continuous"]


def test_load_state_builds_registry_and_catalog(tmp_path: Path) -> None:
    path = tmp_path / "state.yaml"
    path.write_text(STATE_YAML, encoding="utf-8")

    snapshot = load_state(path)

    startup = snapshot.registry.find_recording("startup")
    assert startup.state is RecordingState.RUNNING
    assert startup.duration == timedelta(seconds=60)
    assert startup.settings[SettingKey("jdk.GarbageCollection", "enabled")] == "true"
    continuous = snapshot.registry.find_recording("2")
    assert continuous.state is RecordingState.NEW
    assert continuous.max_size == 0
    gc = snapshot.catalog.get("jdk.GarbageCollection")
    assert gc is not None and gc.label == "jdk.GarbageCollection"
    assert gc.setting_names == ("threshold", "enabled")


def test_load_state_supports_json(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps({"recordings": [{"id": 3, "name": "json", "state": "STOPPED", "max_age": 120}]}),
        encoding="utf-8",
    )

    text = check_recordings(*_sources(load_state(path)))

    assert text == "Recording 3: name=json maxage=2m (stopped)\n"


def _sources(snapshot):
    return snapshot.registry, snapshot.catalog


def test_load_state_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_state(tmp_path / "missing.yml")


def test_load_state_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "state.yml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_state(path)


def test_empty_state_file_has_no_recordings(tmp_path: Path) -> None:
    path = tmp_path / "state.yml"
    path.write_text("", encoding="utf-8")

    snapshot = load_state(path)

    assert snapshot.registry.list_recordings() == []
    assert len(snapshot.catalog) == 0


def test_validate_reports_errors() -> None:
    result = validate_state_config(
        {
            "event_types": [{"label": "no name"}],
            "recordings": [
                {"id": 1, "name": "a", "max_size": -1},
                {"id": 1, "name": "b", "state": "paused"},
                {"name": "c", "duration": "forever"},
            ],
        }
    )

    assert not result.ok
    assert "event_types[0] is missing required field 'name'" in result.errors
    assert "Duplicate recording id 1" in result.errors
    assert "recordings[2] is missing required field 'id'" in result.errors
    assert any("max_size" in error for error in result.errors)
    assert any("unknown state 'paused'" in error for error in result.errors)
    assert any("duration" in error for error in result.errors)


def test_validate_warns_about_undeclared_settings() -> None:
    result = validate_state_config(
        {
            "event_types": [{"name": "jdk.CPULoad", "settings": ["enabled"]}],
            "recordings": [
                {"id": 1, "name": "a", "settings": {"jdk.CPULoad#period": "1 s", "jdk.Nope#enabled": "true"}},
            ],
        }
    )

    assert result.ok
    assert len(result.warnings) == 2
    assert result.normalized["recordings"][0]["state"] == "new"
    assert result.normalized["event_types"][0]["label"] == "jdk.CPULoad"


def test_build_state_raises_config_error() -> None:
    with pytest.raises(ConfigError) as excinfo:
        build_state({"recordings": [{"id": "x"}]})

    assert excinfo.value.errors


def test_recording_splits_setting_keys_on_last_separator() -> None:
    recording = Recording(id=1, name="r", settings={"odd#type#enabled": "true"})

    assert recording.setting("odd#type", "enabled") == "true"


def test_recording_rejects_malformed_setting_key() -> None:
    with pytest.raises(ValidationError):
        Recording(id=1, name="r", settings={"no-separator": "true"})


def test_recording_rejects_negative_max_size() -> None:
    with pytest.raises(ValidationError):
        Recording(id=1, name="r", max_size=-1)


def test_event_type_accepts_descriptor_mappings() -> None:
    event_type = EventType.model_validate(
        {"name": "jdk.ThreadSleep", "settings": [{"name": "threshold", "default_value": "20 ms"}, "enabled"]}
    )

    assert event_type.label == "jdk.ThreadSleep"
    assert event_type.setting_descriptors[0].label == "threshold"
    assert event_type.setting_descriptors[0].default_value == "20 ms"
    assert event_type.setting_names == ("threshold", "enabled")


def test_validate_reports_unrepresentable_timespans() -> None:
    result = validate_state_config(
        {
            "recordings": [
                {"id": 1, "name": "huge", "duration": "99999999999d"},
                {"id": 2, "name": "tiny", "max_age": "500ns"},
            ]
        }
    )

    assert any(error.startswith("recordings[0]: field 'duration'") for error in result.errors)
    assert any(error.startswith("recordings[1]: field 'max_age'") for error in result.errors)


def test_load_state_with_huge_duration_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "state.yml"
    path.write_text("recordings:\n  - id: 1\n    name: a\n    duration: 99999999999d\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_state(path)


def test_recording_rejects_sub_microsecond_duration() -> None:
    with pytest.raises(ValidationError):
        Recording(id=1, name="a", duration="500ns")
