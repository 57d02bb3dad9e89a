"""CLI entry point for notes-tags."""

import argparse
import json
import logging
import sys
from pathlib import Path

import notes_tags.io.logging_setup
import notes_tags.io.settings
from notes_tags.core.segmentation import tag_names
from notes_tags.core.tagged_notes import TagEntry, compose_tagged_notes, parse_tagged_notes
from notes_tags.tui.app import NotesTagsApp

logger = logging.getLogger(__name__)


def _read_source(value: str | None) -> str:
    """Read text from '-' (stdin), a path, or nothing (stdin)."""
    if value is None or value == "-":
        return sys.stdin.read()
    return Path(value).read_text(encoding="utf-8")


def _read_notes(value: str | None) -> str:
    """Notes text itself, or stdin for '-' or nothing."""
    if value is None or value == "-":
        return sys.stdin.read()
    return value


def _cmd_parse(args) -> int:
    notes = _read_notes(args.text)
    entries = parse_tagged_notes(notes)
    print(json.dumps([e.to_dict() for e in entries], indent=args.indent, ensure_ascii=False))
    return 0


def _cmd_compose(args, parser: argparse.ArgumentParser) -> int:
    raw = _read_source(args.source)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        parser.error(f"compose: invalid JSON: {exc}")
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        parser.error("compose: expected a JSON list of {tag, content} objects")
    print(compose_tagged_notes(TagEntry.from_dict(item) for item in data))
    return 0


def _cmd_tags(args) -> int:
    notes = _read_notes(args.text)
    for name in tag_names(notes):
        print(name)
    return 0


def _cmd_edit(args) -> int:
    path = Path(args.file)
    notes = path.read_text(encoding="utf-8") if path.exists() else ""

    def persist(composed: str) -> None:
        notes_tags.io.settings.write_text_atomic(path, composed + "\n" if composed else "")
        logger.info("wrote notes to %s", path, extra={"notes_tags_in_app": True})

    app = NotesTagsApp(notes.rstrip("\n"), on_save=persist)
    app.run()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notes-tags",
        description="Split #tagged notes into entries and compose them back",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: INFO). Env: NOTES_TAGS_LOG_LEVEL",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Print entries of a notes string as JSON")
    p_parse.add_argument("text", nargs="?", default=None, help="Notes text or '-' (default: stdin)")
    p_parse.add_argument("--indent", type=int, default=None, help="JSON indent")

    p_compose = sub.add_parser("compose", help="Compose a JSON entry list into notes")
    p_compose.add_argument("source", nargs="?", default=None, help="JSON file or '-' (default: stdin)")

    p_tags = sub.add_parser("tags", help="List tag names in document order")
    p_tags.add_argument("text", nargs="?", default=None, help="Notes text or '-' (default: stdin)")

    p_edit = sub.add_parser("edit", help="Open the notes editor TUI on a file")
    p_edit.add_argument("file", help="Notes file (created on save)")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    runtime = notes_tags.io.logging_setup.configure(session_name=args.command, level=args.log_level)
    logger.debug("command=%s log_file=%s", args.command, runtime.file_path)

    if args.command == "parse":
        return _cmd_parse(args)
    if args.command == "compose":
        return _cmd_compose(args, parser)
    if args.command == "tags":
        return _cmd_tags(args)
    return _cmd_edit(args)


if __name__ == "__main__":
    sys.exit(main())
