"""CLI entry point for cppstyle."""
import argparse
from dotenv import load_dotenv
import json
import logging
import sys
import traceback
from pathlib import Path

from cppstyle.exceptions import CppStyleError, EditApplicationError
from cppstyle.formatter.pipeline import FormatPipeline
from cppstyle.models import DEFAULT_FALLBACK_STYLE, DEFAULT_TIMEOUT_SECONDS, FormatOutcome, Selection
from cppstyle.settings import EnvSettings, should_format_on_save
from cppstyle.utils.edit_translator import apply_edits

load_dotenv()

# Exit codes
EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 1
EXIT_FORMAT_FAILED = 2
EXIT_APPLY_FAILED = 3
EXIT_UNEXPECTED = 5
EXIT_KEYBOARD_INTERRUPT = 130


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cppstyle-format",
        description="Format a C/C++ file with clang-format as a minimal edit script",
    )
    parser.add_argument("file", type=str, help="Source file to format")
    parser.add_argument(
        "--clang-format",
        type=str,
        default="",
        help="Path to the clang-format executable (default: CPPSTYLE_CLANG_FORMAT_PATH)",
    )
    parser.add_argument(
        "--workspace-root",
        type=str,
        default="",
        help="Working directory for clang-format (default: current directory)",
    )
    parser.add_argument("--offset", type=int, default=None, help="Start of the range to format")
    parser.add_argument("--length", type=int, default=None, help="Length of the range to format")
    parser.add_argument(
        "--fallback-style",
        type=str,
        default=DEFAULT_FALLBACK_STYLE,
        help=f"Style used when clang-format finds no config (default: {DEFAULT_FALLBACK_STYLE})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT_SECONDS,
        help=f"Timeout in seconds (default: {DEFAULT_TIMEOUT_SECONDS})",
    )
    parser.add_argument(
        "--in-place", action="store_true", help="Rewrite the file instead of printing it"
    )
    parser.add_argument(
        "--on-save",
        action="store_true",
        help="Only format when format-on-save is enabled in settings",
    )
    parser.add_argument(
        "--output-json", action="store_true", help="Print the outcome as JSON"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    return parser


def validate_file_path(raw_path: str) -> str:
    """Resolve the source file path.

    Raises:
        SystemExit: If the path is not a regular file.
    """
    resolved = Path(raw_path).resolve()
    if not resolved.is_file():
        print(f"Error: '{raw_path}' is not a file.", file=sys.stderr)
        raise SystemExit(EXIT_INVALID_INPUT)
    return str(resolved)


def build_selection(args: argparse.Namespace) -> Selection | None:
    """Build a Selection from --offset/--length.

    Raises:
        SystemExit: If only one of the two is given, or either is negative.
    """
    if args.offset is None and args.length is None:
        return None
    if args.offset is None or args.length is None:
        print("Error: --offset and --length must be given together.", file=sys.stderr)
        raise SystemExit(EXIT_INVALID_INPUT)
    if args.offset < 0 or args.length < 0:
        print("Error: --offset and --length must not be negative.", file=sys.stderr)
        raise SystemExit(EXIT_INVALID_INPUT)
    return Selection(offset=args.offset, length=args.length)


def read_source(file_path: str) -> str:
    """Read a source file with its line endings untouched."""
    with open(file_path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_source(file_path: str, text: str) -> None:
    with open(file_path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def format_outcome_json(outcome: FormatOutcome) -> str:
    return json.dumps(outcome.model_dump(mode="json"), indent=2)


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

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        file_path = validate_file_path(args.file)
        selection = build_selection(args)
    except SystemExit as exc:
        return exc.code

    settings = EnvSettings()
    executable_path = args.clang_format or None
    if args.on_save and not should_format_on_save(settings, executable_path=executable_path):
        if args.verbose:
            print("Format on save is disabled; nothing to do.", file=sys.stderr)
        return EXIT_SUCCESS

    try:
        source = read_source(file_path)
        pipeline = FormatPipeline(
            settings=settings,
            executable_path=executable_path,
            workspace_root=args.workspace_root or None,
            fallback_style=args.fallback_style,
            timeout_seconds=args.timeout,
        )
        outcome = pipeline.format_text(source, file_path, selection)

        if args.output_json:
            print(format_outcome_json(outcome))

        if not outcome.succeeded:
            return EXIT_FORMAT_FAILED

        result = apply_edits(source, outcome.edits)
        if args.in_place:
            if outcome.changed:
                write_source(file_path, result)
                if args.verbose:
                    print(f"Applied {len(outcome.edits)} edits to {file_path}", file=sys.stderr)
        elif not args.output_json:
            sys.stdout.write(result)

        return EXIT_SUCCESS

    except EditApplicationError as exc:
        return _handle_error("Failed to apply change", exc, args.verbose, EXIT_APPLY_FAILED)

    except CppStyleError as exc:
        return _handle_error("Failed to format code", exc, args.verbose, EXIT_FORMAT_FAILED)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_KEYBOARD_INTERRUPT

    except Exception as exc:
        return _handle_error("Unexpected error", exc, args.verbose, EXIT_UNEXPECTED)
