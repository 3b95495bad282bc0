"""CLI wrapper to print a recording status report."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from recording_check import ConfigError, NotFoundError, ReportBuilder, load_state


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print the status of recordings in a state snapshot")
    parser.add_argument("state", type=Path, help="Path to a state snapshot (YAML or JSON)")
    parser.add_argument("recording", nargs="?", help="Name or id of the recording (default: all)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Include event settings")
    args = parser.parse_args(argv)

    try:
        snapshot = load_state(args.state)
        report = ReportBuilder(snapshot.registry, snapshot.catalog).build(args.recording, args.verbose)
    except (ConfigError, FileNotFoundError, NotFoundError) as exc:
        raise SystemExit(str(exc))
    print(report.text, end="")


if __name__ == "__main__":
    main()
