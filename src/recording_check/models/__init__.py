"""Pydantic models for recordings and the event-type catalog."""

from .event_type import EventType, SettingDescriptor
from .recording import Recording, RecordingState, SettingKey

__all__ = ["Recording", "RecordingState", "SettingKey", "EventType", "SettingDescriptor"]
