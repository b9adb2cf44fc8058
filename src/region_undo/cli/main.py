"""CLI entry point for region-undo."""
import argparse
import json
import sys
import traceback
from pathlib import Path

from region_undo.config import Settings, configure_logging, load_settings
from region_undo.exceptions import (
    HistoryExhaustedError,
    NoMappingError,
    QueryFailedError,
)
from region_undo.session.browser import browse_history
from region_undo.session.buffer import LineBuffer
from region_undo.session.undo_session import UndoSession
from region_undo.vcs.git_client import GitClient

# Exit codes
EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 1
EXIT_NO_MAPPING = 2
EXIT_HISTORY_EXHAUSTED = 3
EXIT_QUERY_FAILED = 4
EXIT_UNEXPECTED = 5
EXIT_KEYBOARD_INTERRUPT = 130

DEFAULT_STEPS = 1


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="region-undo",
        description="Step a range of lines backward through its git history",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    history = commands.add_parser("history", help="List every older revision of a range")
    _add_range_arguments(history)
    history.add_argument(
        "--patch", action="store_true", help="Show the diff each revision introduced"
    )

    undo = commands.add_parser("undo", help="Walk a range back through its history")
    _add_range_arguments(undo)
    undo.add_argument(
        "--steps",
        type=int,
        default=DEFAULT_STEPS,
        help=f"Number of steps to walk back (default: {DEFAULT_STEPS})",
    )
    undo.add_argument(
        "--write",
        action="store_true",
        help="Save the rewound region back into the working copy",
    )
    return parser


def _add_range_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", type=str, help="Path to a file in a git work tree")
    parser.add_argument("start", type=int, help="First line of the range (1-based)")
    parser.add_argument("end", type=int, help="Last line of the range (inclusive)")
    parser.add_argument(
        "--output-json", action="store_true", help="Output results as JSON"
    )


def validate_file_path(raw_path: str) -> Path:
    """Resolve the file argument.

    Raises:
        SystemExit: If the path is not an existing file.
    """
    resolved = Path(raw_path).resolve()
    if not resolved.is_file():
        print(f"Error: '{raw_path}' is not a file.", file=sys.stderr)
        raise SystemExit(EXIT_INVALID_INPUT)
    return resolved


def validate_range(start: int, end: int) -> None:
    """Reject ranges that are not 1-based and ordered.

    Raises:
        SystemExit: If the range is invalid.
    """
    if start < 1 or end < start:
        print(f"Error: invalid line range {start}-{end}.", file=sys.stderr)
        raise SystemExit(EXIT_INVALID_INPUT)


def _label(commit: str | None, summary: str) -> str:
    if commit is None:
        return "working copy (uncommitted)"
    return f"{commit[:12]} {summary}".rstrip()


def run_history(args: argparse.Namespace, settings: Settings) -> int:
    revisions = browse_history(
        args.file, args.start, args.end, git=GitClient(settings.git_binary)
    )
    if args.output_json:
        print(json.dumps([r.model_dump() for r in revisions], indent=2))
        return EXIT_SUCCESS

    if not revisions:
        print("No history for this range.")
    for revision in revisions:
        print(f"=== [{revision.position}] {_label(revision.commit, revision.summary)}")
        if args.patch:
            print(revision.diff_text)
        else:
            print(revision.text, end="" if revision.text.endswith("\n") else "\n")
    return EXIT_SUCCESS


def run_undo(args: argparse.Namespace, settings: Settings) -> int:
    if args.steps < 1:
        print("Error: --steps must be at least 1.", file=sys.stderr)
        return EXIT_INVALID_INPUT

    buffer = LineBuffer.from_file(args.file)
    session = UndoSession(buffer, args.file, git=GitClient(settings.git_binary))
    results = []
    exit_code = EXIT_SUCCESS
    try:
        results.append(session.start(args.start, args.end))
        for _ in range(args.steps - 1):
            results.append(session.step())
    except HistoryExhaustedError as exc:
        print(f"History exhausted: {exc}", file=sys.stderr)
        exit_code = EXIT_HISTORY_EXHAUSTED

    if args.write and any(r.patch is not None for r in results):
        buffer.write(args.file)

    if args.output_json:
        print(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
        return exit_code

    for result in results:
        if result.patch is None:
            print("No history for this range.")
            continue
        print(
            f"=== [{result.patch.position}] "
            f"{_label(result.patch.commit, result.patch.summary)} "
            f"(lines {result.region_start}+{result.region_lines}, {result.remaining} left)"
        )
        print(result.text, end="" if result.text.endswith("\n") else "\n")
    return exit_code


def _handle_error(label: str, exc: BaseException, verbose: bool, exit_code: int) -> int:
    """Print error message to stderr and return the exit code."""
    print(f"{label}: {exc}", file=sys.stderr)
    if verbose:
        traceback.print_exc(file=sys.stderr)
    return exit_code


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code integer.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        args.file = str(validate_file_path(args.file))
        validate_range(args.start, args.end)
    except SystemExit as exc:
        return exc.code

    try:
        settings = load_settings()
    except ValueError as exc:
        return _handle_error("Invalid configuration", exc, args.verbose, EXIT_INVALID_INPUT)
    configure_logging(settings, verbose=args.verbose)

    try:
        if args.command == "history":
            return run_history(args, settings)
        return run_undo(args, settings)

    except NoMappingError as exc:
        return _handle_error("Selection not found in history", exc, args.verbose, EXIT_NO_MAPPING)

    except QueryFailedError as exc:
        return _handle_error("Git query failed", exc, args.verbose, EXIT_QUERY_FAILED)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_KEYBOARD_INTERRUPT

    except Exception as exc:
        return _handle_error("Unexpected error", exc, args.verbose, EXIT_UNEXPECTED)
