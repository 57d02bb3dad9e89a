"""Segment raw notes text into typed Segments.

Splits a free-form notes string into structural regions:
- TEXT: plain text (default gap-fill)
- TAG: marker-prefixed tag name, e.g. ``#groceries``
- LINK: bare URL (``http://``, ``https://`` or ``www.``)

Single linear scan over one combined pattern with document-order precedence:
the structure (link or tag) starting earliest wins. A link span is
opaque, so a ``#fragment`` inside a URL is not re-scanned as a tag.

// [LAW:dataflow-not-control-flow] segment() is a pure function: text in, Segments out.
// [LAW:one-source-of-truth] All notes tokenizing lives here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


MARKER = "#"


# ─── Data model ──────────────────────────────────────────────────────────────


class SegmentKind(Enum):
    TEXT = "text"
    TAG = "tag"
    LINK = "link"


@dataclass(frozen=True)
class Span:
    start: int
    end: int  # exclusive


@dataclass(frozen=True)
class Segment:
    kind: SegmentKind
    value: str  # tag name without marker for TAG, raw text otherwise
    span: Span


# ─── Regex patterns ──────────────────────────────────────────────────────────

LINK_PATTERN = r"(?:https?://|www\.)\S+"

# Marker followed by a run of non-space, non-marker characters
TAG_PATTERN = re.escape(MARKER) + r"[^\s" + re.escape(MARKER) + r"]+"

# Link alternative first: at the same position a link wins.
STRUCTURE_RE = re.compile(
    rf"(?P<link>{LINK_PATTERN})|(?P<tag>{TAG_PATTERN})",
    re.IGNORECASE,
)


# ─── Segmentation algorithm ─────────────────────────────────────────────────


def segment(raw_text: str) -> tuple[Segment, ...]:
    """Segment raw notes text into typed Segments.

    Spans are contiguous and cover the whole input, so joining
    ``raw_text[s.span.start:s.span.end]`` over the result reproduces it.
    """
    if not raw_text:
        return ()

    out: list[Segment] = []
    text_start = 0

    # finditer resumes after each match, so the scan stays linear.
    for m in STRUCTURE_RE.finditer(raw_text):
        _flush_text(raw_text, text_start, m.start(), out)
        if m.lastgroup == "link":
            out.append(Segment(SegmentKind.LINK, m.group(0), Span(m.start(), m.end())))
        else:
            out.append(Segment(SegmentKind.TAG, m.group(0)[len(MARKER):], Span(m.start(), m.end())))
        text_start = m.end()

    _flush_text(raw_text, text_start, len(raw_text), out)
    return tuple(out)


def _flush_text(text: str, start: int, end: int, out: list[Segment]) -> None:
    """Append the gap [start, end) as a TEXT segment when non-empty."""
    if end > start:
        out.append(Segment(SegmentKind.TEXT, text[start:end], Span(start, end)))


def tag_names(raw_text: str) -> list[str]:
    """Return tag names in document order (duplicates kept)."""
    return [s.value for s in segment(raw_text) if s.kind is SegmentKind.TAG]
