"""Command line entry point for slicing and rewriting files by line/character range."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence, TextIO

from .core.ranges import Position, Range
from .core.text import POSITION_ENCODINGS, resolve_eol
from .editor.patches import apply_text_edits
from .editor.range_edits import RangeEditor
from .errors import RangeEditError
from .protocol import parse_text_edits
from .services.settings import Settings, SettingsStore
from .utils import file_io
from .utils.logging import setup_logging

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_RANGE_ERROR = 2


def main(
    argv: Sequence[str] | None = None,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    out = stdout or sys.stdout
    err = stderr or sys.stderr
    args = _parse_args(argv)

    store = SettingsStore(Path(args.settings) if args.settings else None)
    overrides: dict[str, Any] = {}
    if args.log_level:
        overrides["log_level"] = args.log_level
    try:
        settings = store.load(overrides=overrides)
        setup_logging(settings, log_dir=args.log_dir)
    except (RangeEditError, ValueError) as exc:
        err.write(f"{exc}\n")
        return EXIT_RANGE_ERROR
    except OSError as exc:
        err.write(f"{exc}\n")
        return EXIT_IO_ERROR

    try:
        text = file_io.read_text(args.file)
        editor = _build_editor(args, settings, text)
        if args.command == "slice":
            result = editor.slice(text, _range_from_args(args), return_rows=args.rows)
            if args.rows:
                out.write(json.dumps(result, ensure_ascii=False) + "\n")
            else:
                out.write(result)
            return EXIT_OK
        if args.command == "replace":
            new_text = args.text if args.text is not None else file_io.read_text(args.text_file)
            updated = editor.replace(text, _range_from_args(args), new_text)
        else:
            edits = parse_text_edits(file_io.read_text(args.edits))
            outcome = apply_text_edits(text, edits, editor.eol, encoding=editor.encoding)
            LOGGER.info("Applied %d edits to %s (%s)", outcome.applied, args.file, outcome.summary)
            updated = outcome.text
    except RangeEditError as exc:
        LOGGER.debug("Range command failed: %s", exc.to_dict())
        err.write(f"{exc}\n")
        return EXIT_RANGE_ERROR
    except OSError as exc:
        err.write(f"{exc}\n")
        return EXIT_IO_ERROR

    if args.in_place:
        try:
            file_io.write_text(args.file, updated)
        except OSError as exc:
            err.write(f"{exc}\n")
            return EXIT_IO_ERROR
        try:
            store.record_recent_file(Path(args.file).resolve())
        except OSError as exc:
            LOGGER.warning("Could not update recent files in %s: %s", store.path, exc)
            err.write(f"warning: recent files not saved: {exc}\n")
    else:
        out.write(updated)
    return EXIT_OK


def _build_editor(args: argparse.Namespace, settings: Settings, text: str) -> RangeEditor:
    eol = resolve_eol(args.eol, text=text) if args.eol else settings.eol
    encoding = args.encoding or settings.position_encoding
    return RangeEditor(eol=eol, encoding=encoding)


def _range_from_args(args: argparse.Namespace) -> Range:
    return Range(args.start, args.end)


def _parse_position(value: str) -> Position:
    line, sep, character = value.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"position '{value}' must use LINE:CHARACTER syntax")
    try:
        return Position(int(line, 10), int(character, 10))
    except (ValueError, RangeEditError) as exc:
        raise argparse.ArgumentTypeError(f"invalid position '{value}'") from exc


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rangeedit",
        description="Slice or rewrite a text file using zero-based line:character ranges.",
    )
    parser.add_argument(
        "--settings",
        metavar="PATH",
        help="Override the default ~/.rangeedit/settings.json path.",
    )
    parser.add_argument("--log-level", metavar="LEVEL", help="Logging level (e.g. DEBUG).")
    parser.add_argument("--log-dir", metavar="PATH", help="Directory for the rotating log file.")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", help="File to read.")
    common.add_argument(
        "--eol",
        metavar="EOL",
        help="Line terminator: lf, crlf, cr or auto (detect from the file).",
    )
    common.add_argument(
        "--encoding",
        choices=POSITION_ENCODINGS,
        help="Unit in which character offsets are counted.",
    )

    ranged = argparse.ArgumentParser(add_help=False)
    ranged.add_argument("--start", required=True, type=_parse_position, metavar="LINE:CHAR")
    ranged.add_argument("--end", required=True, type=_parse_position, metavar="LINE:CHAR")

    writer = argparse.ArgumentParser(add_help=False)
    writer.add_argument(
        "--in-place",
        action="store_true",
        help="Write the result back to FILE instead of printing it.",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    slicer = commands.add_parser("slice", parents=[common, ranged], help="Print the text inside a range.")
    slicer.add_argument("--rows", action="store_true", help="Print the covered rows as a JSON list.")

    replacer = commands.add_parser(
        "replace", parents=[common, ranged, writer], help="Replace the text inside a range."
    )
    source = replacer.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Replacement text.")
    source.add_argument("--text-file", metavar="PATH", help="Read the replacement text from PATH.")

    applier = commands.add_parser(
        "apply", parents=[common, writer], help="Apply a JSON list of LSP TextEdits."
    )
    applier.add_argument("edits", help="JSON file holding the TextEdit list.")

    return parser.parse_args(argv)


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
