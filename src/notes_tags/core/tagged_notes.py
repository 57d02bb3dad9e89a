"""Group notes segments into tag entries, and compose them back.

parse_tagged_notes() folds the segment stream into an ordered list of
TagEntry records. compose_tagged_notes() is its inverse: for any list
produced by the parser, ``parse(compose(parse(s))) == parse(s)`` as long as
tag names are marker-safe.

// [LAW:dataflow-not-control-flow] Both functions are pure; every call builds fresh lists.
// [LAW:one-source-of-truth] The marker character comes from core.segmentation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from notes_tags.core.segmentation import MARKER, SegmentKind, segment

logger = logging.getLogger(__name__)

GENERAL_NOTES_LABEL = "General Notes"

# Segment kinds whose payload contributes to the current entry's content
_CONTENT_KINDS = frozenset({SegmentKind.TEXT, SegmentKind.LINK})


@dataclass(frozen=True)
class TagEntry:
    """One logical block of a notes string.

    tag is stored without the marker; "" means untagged (general notes).
    """

    tag: str
    content: str

    @property
    def label(self) -> str:
        return f"{MARKER}{self.tag}" if self.tag else GENERAL_NOTES_LABEL

    def is_blank(self) -> bool:
        """True when neither tag nor content carries anything."""
        return not self.tag.strip() and not self.content.strip()

    def to_dict(self) -> dict[str, str]:
        return {"tag": self.tag, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict) -> TagEntry:
        return cls(tag=str(data.get("tag") or ""), content=str(data.get("content") or ""))


def parse_tagged_notes(notes: str | None) -> list[TagEntry]:
    """Parse a notes string into tag entries.

    Each tag starts a new entry carrying the text that follows it. Text
    before the first tag becomes an entry with an empty tag. Whitespace-only
    input yields an empty list.
    """
    if not notes or not notes.strip():
        return []

    entries: list[TagEntry] = []
    current_tag = ""
    current_content = ""

    for seg in segment(notes):
        if seg.kind is SegmentKind.TAG:
            _flush(entries, current_tag, current_content)
            current_tag = seg.value
            current_content = ""
        elif seg.kind in _CONTENT_KINDS:
            # Trimming waits for finalization; inner whitespace is kept as-is.
            current_content += seg.value

    _flush(entries, current_tag, current_content)
    logger.debug("parsed notes chars=%d entries=%d", len(notes), len(entries))
    return entries


def _flush(entries: list[TagEntry], tag: str, content: str) -> None:
    if tag != "" or content.strip() != "":
        entries.append(TagEntry(tag=tag, content=content.strip()))


def normalize_tag(tag: str) -> str:
    """Return tag with exactly the marker prefix it needs for serialization."""
    return tag if tag.startswith(MARKER) else f"{MARKER}{tag}"


def strip_marker(name: str) -> str:
    """Trim name and drop a single leading marker, if present."""
    trimmed = name.strip()
    return trimmed[len(MARKER):] if trimmed.startswith(MARKER) else trimmed


def _fragment(entry: TagEntry) -> str:
    content = entry.content.strip()
    if entry.tag.strip() == "":
        return content
    tag = normalize_tag(entry.tag)
    return f"{tag} {content}" if content else tag


def compose_tagged_notes(entries: Iterable[TagEntry]) -> str:
    """Compose tag entries back into one notes string.

    Format: ``untagged #tag content #tag2 content2``. Entries with neither a
    tag nor content are dropped.
    """
    fragments = [_fragment(e) for e in entries if not e.is_blank()]
    composed = " ".join(fragments)
    logger.debug("composed notes entries=%d chars=%d", len(fragments), len(composed))
    return composed
