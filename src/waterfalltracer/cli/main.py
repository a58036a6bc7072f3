"""Command line interface for waterfalltracer.

    waterfalltracer inspect TRACE_FILE   report one recorded run
    waterfalltracer list DIRECTORY       summarise every run a FileStore holds
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import cast

from .inspect_cmd import VerbosityArg, run_inspect
from .list_cmd import run_list


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="waterfalltracer",
        description="Read back waterfall runs recorded by RecordingTracer.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect_parser = subparsers.add_parser(
        "inspect", help="Show the step chain, failed step and span tree of one run"
    )
    inspect_parser.add_argument(
        "trace_file", type=Path, help="Trace JSON file written by FileStore"
    )
    inspect_parser.add_argument(
        "--verbosity",
        choices=["minimal", "standard", "full"],
        default="standard",
        help="How much of each span the tree shows",
    )
    inspect_parser.add_argument(
        "--json", action="store_true", help="Emit the run report as JSON instead of text"
    )
    inspect_parser.add_argument(
        "--output", type=Path, default=None, help="Write the --json report to this file"
    )
    inspect_parser.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 3 unless every step succeeded and every span closed",
    )

    list_parser = subparsers.add_parser("list", help="Summarise every run in a trace directory")
    list_parser.add_argument("directory", type=Path, help="Directory used by FileStore")
    list_parser.add_argument("--json", action="store_true", help="Emit run reports as JSON")
    list_parser.add_argument(
        "--failed", action="store_true", help="Only show runs that failed or never finished"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "inspect":
        return run_inspect(
            args.trace_file,
            cast(VerbosityArg, args.verbosity),
            as_json=args.json,
            output_path=args.output,
            check=args.check,
        )
    return run_list(args.directory, as_json=args.json, failed_only=args.failed)


if __name__ == "__main__":
    raise SystemExit(main())
