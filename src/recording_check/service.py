"""FastAPI service exposing recording status reports."""

from __future__ import annotations

import logging
from importlib import metadata
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException

from .catalog import EventTypeCatalog
from .check import ReportBuilder
from .errors import NotFoundError
from .logging_utils import log_event
from .registry import InMemoryRecordingRegistry, RecordingRegistry

try:
    __version__ = metadata.version("recording-check")
except metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


def create_app(
    registry: RecordingRegistry | None = None,
    catalog: EventTypeCatalog | None = None,
) -> FastAPI:
    app = FastAPI(title="Recording Check API", version=__version__)
    if registry is None:
        registry = InMemoryRecordingRegistry()
    if catalog is None:
        catalog = EventTypeCatalog()
    builder = ReportBuilder(registry, catalog)

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/version")
    def version() -> Dict[str, str]:
        return {"version": __version__}

    @app.get("/recordings")
    def recordings() -> Dict[str, Any]:
        return {
            "recordings": [
                {"id": r.id, "name": r.name, "state": r.state.value.lower()}
                for r in builder.registry.list_recordings()
            ]
        }

    @app.get("/check")
    def check(recording: Optional[str] = None, verbose: bool = False) -> Dict[str, Any]:
        try:
            report = builder.build(recording, verbose)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        log_event(logger, "check_complete", recordings=report.recordings, lines=len(report.lines))
        return {"report": report.text, "lines": list(report.lines)}

    return app
