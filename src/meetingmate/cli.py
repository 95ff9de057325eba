"""Command-line entrypoint.

Reads a copied calendar invitation from a file or stdin and writes the
rendered notes to a file or stdout:

    pbpaste | meetingmate | pbcopy
    meetingmate --input meeting.txt --details --attendees --output notes.md
    meetingmate --input meeting.txt --plain
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, TextIO

import structlog

from . import __version__
from .config import AppConfig, load_config
from .errors import AppError, InputReadError, OutputWriteError, to_error_payload
from .log import configure_logging
from .parser import extract_meeting
from .utils import render_meeting

logger = structlog.get_logger(__name__)

EPILOG = """\
examples:
  # Copy clean markdown from clipboard to clipboard
  pbpaste | meetingmate | pbcopy

  # Full detailed output with all sections
  meetingmate --input meeting.txt --details --attendees --output notes.md

  # Plain text output for copying to email/chat
  meetingmate --input meeting.txt --plain
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="meetingmate",
        description="Convert calendar meeting info to markdown notes.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-i", "--input", type=Path,
                   help="Input file containing meeting information (default: stdin).")
    p.add_argument("-o", "--output", type=Path,
                   help="Output markdown file path.")
    p.add_argument("--details", action="store_true",
                   help="Include the meeting details section.")
    p.add_argument("--attendees", action="store_true",
                   help="Include the attendees section.")
    p.add_argument("--plain", action="store_true",
                   help="Output plain text without markdown formatting.")
    p.add_argument("-v", "--version", action="version",
                   version=f"meetingmate v{__version__}")
    return p


def read_input(path: Optional[Path], stdin: TextIO) -> str:
    """Read the invitation text from `path`, or from `stdin` when None."""

    if path is None:
        try:
            return stdin.read()
        except OSError as exc:
            raise InputReadError(
                "Error reading from stdin", {"reason": str(exc)}
            ) from exc
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputReadError(
            f"Error reading input file: {path}",
            {"path": str(path), "reason": str(exc)},
        ) from exc


def write_output(path: Path, notes: str) -> None:
    try:
        path.write_text(notes, encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(
            f"Error writing to output file: {path}",
            {"path": str(path), "reason": str(exc)},
        ) from exc


def run(
    args: argparse.Namespace,
    config: AppConfig,
    *,
    stdin: TextIO,
    stdout: TextIO,
) -> int:
    text = read_input(args.input, stdin)
    if not text.strip():
        stdout.write("No input provided. Use --help for usage information.\n")
        return 0

    meeting = extract_meeting(text)
    notes = render_meeting(
        meeting,
        include_details=args.details or config.include_details,
        include_attendees=args.attendees or config.include_attendees,
        plain=args.plain or config.plain,
    )

    if args.output is not None:
        write_output(args.output, notes)
        stdout.write(f"Meeting notes saved to: {args.output}\n")
    else:
        stdout.write(notes)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Parse arguments, convert the invitation and return an exit status."""

    args = build_parser().parse_args(argv)
    config = load_config()
    configure_logging(config.log_level, json_output=config.log_json)

    try:
        return run(args, config, stdin=sys.stdin, stdout=sys.stdout)
    except (AppError, OSError) as exc:
        path_hint = str(args.input) if args.input is not None else None
        logger.error("conversion_failed", **to_error_payload(exc, path_hint=path_hint))
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
