"""Recording registries: lookup by name or id and enumeration."""

from __future__ import annotations

import json
import re
import sqlite3
import threading
from abc import ABC, abstractmethod
from datetime import timedelta
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import NotFoundError
from .models import Recording


_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_ID_MIN, _ID_MAX = -(2**31), 2**31 - 1


def _parse_id(recording_ref: str) -> Optional[int]:
    """Return the id a reference denotes, or None when it must be matched as a name.

    Only plain ASCII decimal integers within the signed 32-bit range count as ids.
    """

    if not _ID_PATTERN.fullmatch(recording_ref):
        return None
    recording_id = int(recording_ref)
    if not _ID_MIN <= recording_id <= _ID_MAX:
        return None
    return recording_id


class RecordingRegistry(ABC):
    """Read interface consumed by status reports."""

    @abstractmethod
    def list_recordings(self) -> List[Recording]:
        ...

    def find_recording(self, recording_ref: str) -> Recording:
        """Resolve ``recording_ref`` as an id when it is numeric, else as a name.

        Names are not unique; the first match in enumeration order wins.
        """

        recording_id = _parse_id(recording_ref)
        for recording in self.list_recordings():
            if recording_id is not None:
                if recording.id == recording_id:
                    return recording
            elif recording.name == recording_ref:
                return recording
        raise NotFoundError(recording_ref)


class InMemoryRecordingRegistry(RecordingRegistry):
    """Registry backed by a list, enumerated in insertion order."""

    def __init__(self, recordings: Iterable[Recording] = ()) -> None:
        self._lock = threading.Lock()
        self._recordings: List[Recording] = list(recordings)

    def add(self, recording: Recording) -> None:
        with self._lock:
            self._recordings.append(recording)

    def list_recordings(self) -> List[Recording]:
        with self._lock:
            return list(self._recordings)


def _to_micros(value: timedelta | None) -> int | None:
    if value is None:
        return None
    return value // timedelta(microseconds=1)


def _from_micros(value: int | None) -> timedelta | None:
    if value is None:
        return None
    return timedelta(microseconds=value)


class SQLiteRecordingRegistry(RecordingRegistry):
    """Recording snapshots persisted in SQLite, enumerated by id."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _init_schema(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._connect()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS recordings (
                    id INTEGER PRIMARY KEY,
                    name TEXT NOT NULL,
                    state TEXT NOT NULL,
                    duration_us INTEGER,
                    max_size INTEGER NOT NULL,
                    max_age_us INTEGER,
                    settings_json TEXT NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def store_recording(self, recording: Recording) -> None:
        """Insert ``recording`` or replace the row with the same id."""

        settings = [[key.event_type, key.setting, value] for key, value in recording.settings.items()]
        conn = self._connect()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO recordings "
                "(id, name, state, duration_us, max_size, max_age_us, settings_json) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    recording.id,
                    recording.name,
                    recording.state.value,
                    _to_micros(recording.duration),
                    recording.max_size,
                    _to_micros(recording.max_age),
                    json.dumps(settings),
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def list_recordings(self) -> List[Recording]:
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT id, name, state, duration_us, max_size, max_age_us, settings_json "
                "FROM recordings ORDER BY id ASC"
            ).fetchall()
        finally:
            conn.close()
        return [
            Recording(
                id=row[0],
                name=row[1],
                state=row[2],
                duration=_from_micros(row[3]),
                max_size=row[4],
                max_age=_from_micros(row[5]),
                settings={(event_type, setting): value for event_type, setting, value in json.loads(row[6])},
            )
            for row in rows
        ]

    def purge(self) -> None:
        """Delete all stored recordings."""

        conn = self._connect()
        try:
            conn.execute("DELETE FROM recordings")
            conn.commit()
        finally:
            conn.close()
