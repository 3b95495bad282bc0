"""Recording model as seen by status reports."""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..formatting import parse_timespan

SETTING_SEPARATOR = "#"


class SettingKey(NamedTuple):
    """Composite ``(event type, setting)`` key of an effective setting."""

    event_type: str
    setting: str

    @classmethod
    def parse(cls, text: str) -> "SettingKey":
        """Split a ``"<eventType>#<setting>"`` key on its last separator."""

        event_type, separator, setting = text.rpartition(SETTING_SEPARATOR)
        if not separator or not event_type or not setting:
            raise ValueError(f"Setting key must look like '<eventType>#<setting>': {text!r}")
        return cls(event_type, setting)

    def __str__(self) -> str:
        return f"{self.event_type}{SETTING_SEPARATOR}{self.setting}"


class RecordingState(str, Enum):
    NEW = "NEW"
    DELAYED = "DELAYED"
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"
    CLOSED = "CLOSED"


def _setting_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Recording(BaseModel):
    """Point-in-time snapshot of a recording's identity, state and limits."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    name: str
    state: RecordingState = RecordingState.NEW
    duration: Optional[timedelta] = None
    max_size: int = Field(default=0, ge=0)
    max_age: Optional[timedelta] = None
    settings: Dict[SettingKey, str] = Field(default_factory=dict)

    @field_validator("state", mode="before")
    @classmethod
    def _normalize_state(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("duration", "max_age", mode="before")
    @classmethod
    def _parse_timespan(cls, value: Any) -> Optional[timedelta]:
        if value is None:
            return None
        return parse_timespan(value)

    @field_validator("settings", mode="before")
    @classmethod
    def _normalize_settings(cls, value: Any) -> Dict[SettingKey, str]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("settings must be a mapping")
        normalized: Dict[SettingKey, str] = {}
        for key, setting_value in value.items():
            if isinstance(key, str):
                key = SettingKey.parse(key)
            elif isinstance(key, (tuple, list)) and len(key) == 2:
                key = SettingKey(str(key[0]), str(key[1]))
            else:
                raise ValueError(f"Unsupported setting key: {key!r}")
            normalized[key] = _setting_value(setting_value)
        return normalized

    def setting(self, event_type: str, setting: str) -> Optional[str]:
        return self.settings.get(SettingKey(event_type, setting))
