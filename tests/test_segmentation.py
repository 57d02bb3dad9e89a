"""Tests for notes_tags.core.segmentation — notes tokenizer."""

import time

import pytest

from notes_tags.core.segmentation import (
    MARKER,
    Segment,
    SegmentKind,
    Span,
    segment,
    tag_names,
)


def kinds(segments: tuple[Segment, ...]) -> list[str]:
    return [s.kind.value for s in segments]


def values(segments: tuple[Segment, ...]) -> list[str]:
    return [s.value for s in segments]


class TestPlainText:
    def test_empty_string(self):
        assert segment("") == ()

    def test_no_structure(self):
        text = "Just a plain note."
        result = segment(text)
        assert kinds(result) == ["text"]
        assert result[0].span == Span(0, len(text))

    def test_lone_marker_is_text(self):
        assert kinds(segment("# heading")) == ["text"]
        assert kinds(segment("trailing #")) == ["text"]


class TestTags:
    def test_tags_split_text(self):
        result = segment("hello #work finish report #home buy milk")
        assert kinds(result) == ["text", "tag", "text", "tag", "text"]
        assert values(result) == ["hello ", "work", " finish report ", "home", " buy milk"]

    def test_tag_value_excludes_marker(self):
        (tag,) = segment("#groceries")
        assert tag.kind == SegmentKind.TAG
        assert tag.value == "groceries"
        assert tag.span == Span(0, len("#groceries"))

    def test_adjacent_tags(self):
        result = segment("#a#b")
        assert kinds(result) == ["tag", "tag"]
        assert values(result) == ["a", "b"]

    def test_double_marker_leaves_first_as_text(self):
        result = segment("a##b")
        assert kinds(result) == ["text", "tag"]
        assert values(result) == ["a#", "b"]

    def test_unicode_tag_name(self):
        result = segment("#café later")
        assert values(result) == ["café", " later"]

    def test_tag_names_in_order_with_duplicates(self):
        assert tag_names("#b x #a y #b z") == ["b", "a", "b"]


class TestLinks:
    @pytest.mark.parametrize(
        "url",
        ["https://example.com/path", "http://example.com", "www.example.com/x", "HTTPS://EXAMPLE.COM"],
    )
    def test_link_detected(self, url):
        result = segment(f"see {url} now")
        assert kinds(result) == ["text", "link", "text"]
        assert result[1].value == url

    def test_fragment_inside_link_is_not_a_tag(self):
        result = segment("#ref https://example.com/page#section")
        assert kinds(result) == ["tag", "text", "link"]
        assert result[2].value == "https://example.com/page#section"


class TestCoverage:
    @pytest.mark.parametrize(
        "text",
        [
            "hello #work finish report #home buy milk",
            "  leading and trailing  ",
            "#only",
            "a##b # c www.x.y #d\n#e",
        ],
    )
    def test_spans_reconstruct_input(self, text):
        result = segment(text)
        assert "".join(text[s.span.start : s.span.end] for s in result) == text

    def test_spans_are_contiguous(self):
        result = segment("x #y https://z.io w")
        for prev, nxt in zip(result, result[1:]):
            assert prev.span.end == nxt.span.start

    def test_marker_constant(self):
        assert MARKER == "#"


class TestScaling:
    def test_many_tags_parse_in_linear_time(self):
        count = 20000
        text = " ".join(f"#t{i} w" for i in range(count))
        started = time.perf_counter()
        result = segment(text)
        elapsed = time.perf_counter() - started
        assert len([s for s in result if s.kind is SegmentKind.TAG]) == count
        assert result[-1].span.end == len(text)
        assert elapsed < 2.0

    def test_link_after_many_tags_still_opaque(self):
        text = " ".join(f"#t{i}" for i in range(500)) + " https://x.io/a#b"
        names = tag_names(text)
        assert len(names) == 500
        assert "b" not in names
