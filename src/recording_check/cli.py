"""Command line interface for recording-check."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any, Sequence

from . import __version__
from .catalog import EventTypeCatalog
from .check import ReportBuilder
from .config import load_state, validate_state_file
from .errors import ConfigError, NotFoundError
from .logging_utils import configure_logging, log_event
from .registry import InMemoryRecordingRegistry, RecordingRegistry, SQLiteRecordingRegistry
from .service import create_app

STATE_ENV = "RCHECK_STATE"
REGISTRY_ENV = "RCHECK_REGISTRY"

logger = logging.getLogger(__name__)


def _print_result(result: Any, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result, indent=2))
    else:
        print(result)


def _env_path(name: str) -> Path | None:
    value = os.getenv(name)
    return Path(value) if value else None


def _resolve_sources(args: argparse.Namespace) -> tuple[RecordingRegistry, EventTypeCatalog]:
    state_path = args.state or _env_path(STATE_ENV)
    registry_path = args.registry or _env_path(REGISTRY_ENV)

    registry: RecordingRegistry = InMemoryRecordingRegistry()
    catalog = EventTypeCatalog()
    if state_path:
        try:
            snapshot = load_state(state_path)
        except (ConfigError, FileNotFoundError) as exc:
            raise SystemExit(str(exc))
        registry, catalog = snapshot.registry, snapshot.catalog
    if registry_path:
        registry = SQLiteRecordingRegistry(registry_path)
    return registry, catalog


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rcheck",
        description="Report the state, limits and event settings of recordings.",
    )
    parser.add_argument("--state", type=Path, help="Path to a state snapshot (YAML or JSON)")
    parser.add_argument("--registry", type=Path, help="Path to a SQLite recording registry (optional)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON logs")

    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Show recordings and their settings")
    check.add_argument("recording", nargs="?", help="Name or id of the recording (default: all)")
    check.add_argument("-v", "--verbose", action="store_true", help="Include event settings")
    check.add_argument("--json", action="store_true", help="Emit the report as JSON to stdout")

    validate = subparsers.add_parser("validate", help="Validate a state snapshot")
    validate.add_argument("snapshot", type=Path, help="Path to a state snapshot (YAML or JSON)")
    validate.add_argument("--json", action="store_true", help="Emit validation result as JSON")

    importer = subparsers.add_parser("import", help="Copy a snapshot's recordings into the registry")
    importer.add_argument("snapshot", type=Path, help="Path to a state snapshot (YAML or JSON)")

    serve = subparsers.add_parser("serve", help="Run FastAPI service")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    subparsers.add_parser("version", help="Display the installed version")

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, json_logs=args.json_logs)

    if args.command == "check":
        registry, catalog = _resolve_sources(args)
        try:
            report = ReportBuilder(registry, catalog).build(args.recording, args.verbose)
        except NotFoundError as exc:
            raise SystemExit(str(exc))
        log_event(logger, "check_complete", recordings=report.recordings, lines=len(report.lines))
        if args.json:
            _print_result({"report": report.text, "lines": list(report.lines)}, as_json=True)
        else:
            print(report.text, end="")
    elif args.command == "validate":
        try:
            result = validate_state_file(args.snapshot)
        except (ConfigError, FileNotFoundError) as exc:
            raise SystemExit(str(exc))
        if args.json:
            _print_result(result.as_dict(), as_json=True)
        else:
            for error in result.errors:
                print(f"error: {error}")
            for warning in result.warnings:
                print(f"warning: {warning}")
            print("valid" if result.ok else "invalid")
        if not result.ok:
            raise SystemExit(1)
    elif args.command == "import":
        registry_path = args.registry or _env_path(REGISTRY_ENV)
        if not registry_path:
            raise SystemExit("Specify --registry to import recordings.")
        try:
            snapshot = load_state(args.snapshot)
        except (ConfigError, FileNotFoundError) as exc:
            raise SystemExit(str(exc))
        target = SQLiteRecordingRegistry(registry_path)
        recordings = snapshot.registry.list_recordings()
        for recording in recordings:
            target.store_recording(recording)
        log_event(logger, "import_complete", registry=str(registry_path), recordings=len(recordings))
        print(f"Imported {len(recordings)} recordings into {registry_path}")
    elif args.command == "serve":
        registry, catalog = _resolve_sources(args)
        app = create_app(registry, catalog)
        try:
            import uvicorn
        except ModuleNotFoundError:
            raise SystemExit("uvicorn is required to run the service. Install with `pip install uvicorn`.")
        uvicorn.run(app, host=args.host, port=args.port)
    elif args.command == "version":
        print(__version__)


if __name__ == "__main__":
    main()
