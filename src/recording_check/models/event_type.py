"""Event type and setting descriptor definitions."""

from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _with_default_label(data: Any) -> Any:
    if isinstance(data, dict) and not data.get("label") and data.get("name"):
        return {**data, "label": data["name"]}
    return data


class SettingDescriptor(BaseModel):
    """Declaration of one configurable parameter of an event type."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str = ""
    description: Optional[str] = None
    default_value: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            data = {"name": data}
        return _with_default_label(data)


class EventType(BaseModel):
    """A catalog-registered kind of event with its declared settings.

    ``setting_descriptors`` keeps declaration order; reports rely on it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    label: str = ""
    description: Optional[str] = None
    setting_descriptors: Tuple[SettingDescriptor, ...] = Field(default=(), alias="settings")

    @model_validator(mode="before")
    @classmethod
    def _default_label(cls, data: Any) -> Any:
        return _with_default_label(data)

    @field_validator("name")
    @classmethod
    def _non_empty_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("event type name must not be empty")
        return value

    @property
    def setting_names(self) -> Tuple[str, ...]:
        return tuple(descriptor.name for descriptor in self.setting_descriptors)
