"""Status reports for recordings.

A report lists each selected recording on one line with its id, name, limits
and state. In verbose mode every recording is followed by the event settings
it has configured, grouped by event type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from .catalog import EventTypeCatalog
from .formatting import format_bytes, format_timespan
from .models import EventType, Recording, SettingKey
from .registry import RecordingRegistry

logger = logging.getLogger(__name__)

NO_RECORDINGS_MESSAGE = (
    "No available recordings.",
    "",
    "Use JFR.start to start a recording.",
)


class ProjectedEventType(NamedTuple):
    event_type: EventType
    settings: Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class Report:
    """Rendered report lines and the number of recordings they describe."""

    lines: Tuple[str, ...] = ()
    recordings: int = 0

    @property
    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)

    def __str__(self) -> str:
        return self.text


def render_general(recording: Recording) -> str:
    """Render ``Recording <id>: name=<name> ... (<state>)``.

    Duration, max size and max age are left out when unset; a max size of zero
    means unlimited.
    """

    parts = [f"Recording {recording.id}: name={recording.name}"]
    if recording.duration is not None:
        parts.append(f" duration={format_timespan(recording.duration, '')}")
    if recording.max_size != 0:
        parts.append(f" maxsize={format_bytes(recording.max_size, '')}")
    if recording.max_age is not None:
        parts.append(f" maxage={format_timespan(recording.max_age, '')}")
    parts.append(f" ({recording.state.value.lower()})")
    return "".join(parts)


def project_settings(
    event_types: Iterable[EventType],
    settings: Mapping[SettingKey, str],
) -> Tuple[ProjectedEventType, ...]:
    """Pick the configured settings of each event type.

    Event types come out sorted by name. Settings keep the order in which the
    event type declares them. Event types with nothing configured are dropped,
    and keys naming unknown event types or settings are ignored.
    """

    projected: List[ProjectedEventType] = []
    for event_type in sorted(event_types, key=lambda et: et.name):
        matched = []
        for descriptor in event_type.setting_descriptors:
            key = SettingKey(event_type.name, descriptor.name)
            if key in settings:
                matched.append((descriptor.name, settings[key]))
        if matched:
            projected.append(ProjectedEventType(event_type, tuple(matched)))
    return tuple(projected)


def render_settings(projected: Sequence[ProjectedEventType]) -> Tuple[str, ...]:
    lines: List[str] = []
    for event_type, settings in projected:
        lines.append(f" {event_type.label} ({event_type.name})")
        lines.append("   " + ",".join(f"{name}={value}" for name, value in settings))
    return tuple(lines)


class ReportBuilder:
    """Builds status reports from a recording registry and an event-type catalog."""

    def __init__(self, registry: RecordingRegistry, catalog: EventTypeCatalog) -> None:
        self.registry = registry
        self.catalog = catalog

    def select(self, recording_ref: Optional[str] = None) -> List[Recording]:
        """Return the named recording, or every recording when no name is given."""

        if recording_ref is not None:
            return [self.registry.find_recording(recording_ref)]
        return self.registry.list_recordings()

    def render_recording(
        self,
        recording: Recording,
        verbose: bool,
        event_types: Sequence[EventType] = (),
    ) -> Tuple[str, ...]:
        lines = [render_general(recording)]
        if verbose:
            lines.append("")
            lines.extend(render_settings(project_settings(event_types, recording.settings)))
        return tuple(lines)

    def build(self, recording_ref: Optional[str] = None, verbose: Optional[bool] = False) -> Report:
        """Render the report for one recording or for all of them.

        Raises :class:`~recording_check.errors.NotFoundError` before anything is
        rendered when ``recording_ref`` does not resolve.
        """

        verbose = bool(verbose)
        logger.debug("check_requested name=%s verbose=%s", recording_ref, verbose)

        recordings = self.select(recording_ref)
        if recording_ref is None and not recordings and not verbose:
            return Report(lines=NO_RECORDINGS_MESSAGE)

        event_types = self.catalog.list_event_types() if verbose else ()
        separator = ("", "") if verbose else ("",)
        lines: List[str] = []
        for index, recording in enumerate(recordings):
            if index:
                lines.extend(separator)
            lines.extend(self.render_recording(recording, verbose, event_types))
        return Report(lines=tuple(lines), recordings=len(recordings))


def check_recordings(
    registry: RecordingRegistry,
    catalog: EventTypeCatalog,
    recording_ref: Optional[str] = None,
    verbose: Optional[bool] = False,
) -> str:
    """Return the report text for ``recording_ref`` (or all recordings)."""

    return ReportBuilder(registry, catalog).build(recording_ref, verbose).text
