"""Tests for word_diff.py."""

import pytest

from docredline.types import SegmentStatus, WordSegment
from docredline.word_diff import WordDiffer, diff_words, tokenize


def _added(segments: list[WordSegment]) -> list[str]:
    return [s.value for s in segments if s.added]


def _removed(segments: list[WordSegment]) -> list[str]:
    return [s.value for s in segments if s.removed]


class TestTokenize:
    def test_words_keep_trailing_whitespace(self):
        assert tokenize("Hello big  world") == ["Hello ", "big  ", "world"]

    def test_leading_whitespace_joins_first_token(self):
        assert tokenize("  Hello world") == ["  Hello ", "world"]

    def test_empty(self):
        assert tokenize("") == []

    def test_whitespace_only(self):
        assert tokenize("   ") == ["   "]

    def test_roundtrip(self):
        text = " Lorem  ipsum\tdolor sit "
        assert "".join(tokenize(text)) == text


class TestWordDiffer:
    def test_word_insertion(self):
        segments = diff_words("Hello world", "Hello beautiful world")
        assert segments == [
            WordSegment("Hello ", SegmentStatus.UNCHANGED),
            WordSegment("beautiful ", SegmentStatus.ADDED),
            WordSegment("world", SegmentStatus.UNCHANGED),
        ]

    def test_word_deletion(self):
        segments = diff_words("Hello beautiful world", "Hello world")
        assert _removed(segments) == ["beautiful "]
        assert _added(segments) == []

    def test_single_substitution_is_one_removed_one_added(self):
        segments = diff_words("The cat sat", "The dog sat")
        assert _removed(segments) == ["cat "]
        assert _added(segments) == ["dog "]
        assert [s.status for s in segments] == [
            SegmentStatus.UNCHANGED,
            SegmentStatus.REMOVED,
            SegmentStatus.ADDED,
            SegmentStatus.UNCHANGED,
        ]

    def test_identical_texts(self):
        segments = diff_words("Same text here", "Same text here")
        assert segments == [WordSegment("Same text here", SegmentStatus.UNCHANGED)]

    def test_both_empty(self):
        assert diff_words("", "") == []

    def test_from_empty(self):
        assert diff_words("", "New content") == [
            WordSegment("New content", SegmentStatus.ADDED)
        ]

    def test_to_empty(self):
        assert diff_words("Old content", "") == [
            WordSegment("Old content", SegmentStatus.REMOVED)
        ]

    def test_whitespace_only_difference_has_no_changes(self):
        segments = diff_words("a   b", "a b")
        assert all(not s.changed for s in segments)

    def test_added_and_unchanged_rebuild_current(self):
        original = "The parties agree to the terms below"
        current = "Both parties shall agree to all terms set out below"
        segments = diff_words(original, current)
        assert "".join(s.value for s in segments if not s.removed) == current

    def test_removed_and_unchanged_rebuild_original(self):
        original = "The parties agree to the terms below"
        current = "Both parties shall agree to all terms set out below"
        segments = diff_words(original, current)
        assert "".join(s.value for s in segments if not s.added) == original

    def test_trailing_deletion_keeps_word_boundary(self):
        original = "The Seller shall deliver the goods within thirty days"
        current = "The Seller shall deliver the goods"
        segments = diff_words(original, current)
        assert segments == [
            WordSegment("The Seller shall deliver the goods", SegmentStatus.UNCHANGED),
            WordSegment(" within thirty days", SegmentStatus.REMOVED),
        ]
        assert "".join(s.value for s in segments if not s.added) == original
        assert "".join(s.value for s in segments if not s.removed) == current

    def test_trailing_insertion_keeps_word_boundary(self):
        original = "Seller shall deliver"
        current = "Seller shall deliver goods promptly"
        segments = diff_words(original, current)
        assert segments == [
            WordSegment("Seller shall deliver", SegmentStatus.UNCHANGED),
            WordSegment(" goods promptly", SegmentStatus.ADDED),
        ]
        assert "".join(s.value for s in segments if not s.added) == original
        assert "".join(s.value for s in segments if not s.removed) == current

    @pytest.mark.parametrize(
        ("original", "current"),
        [
            ("Seller shall deliver goods promptly", "Seller shall deliver"),
            ("x1 x2 alpha y1 y2", "z1 z2 alpha"),
            ("alpha", "alpha beta gamma"),
            ("One two three", "One NEW three ADDED"),
            ("keep this ", "keep this and more"),
            ("", "fresh text"),
        ],
    )
    def test_both_sides_rebuild_exactly(self, original, current):
        segments = diff_words(original, current)
        assert "".join(s.value for s in segments if not s.added) == original
        assert "".join(s.value for s in segments if not s.removed) == current

    def test_adjacent_segments_have_different_status(self):
        segments = diff_words("one two three four", "uno dos three cuatro")
        for a, b in zip(segments, segments[1:]):
            assert a.status != b.status

    def test_rewritten_prefix(self):
        segments = diff_words(
            "The quick brown fox jumps over the lazy dog",
            "A slow red hound jumps over the lazy dog",
        )
        assert segments == [
            WordSegment("The quick brown fox ", SegmentStatus.REMOVED),
            WordSegment("A slow red hound ", SegmentStatus.ADDED),
            WordSegment("jumps over the lazy dog", SegmentStatus.UNCHANGED),
        ]

    def test_unicode_words(self):
        segments = diff_words("Mixed: Hello 世界", "Mixed: Hello 🌍")
        assert _removed(segments) == ["世界"]
        assert _added(segments) == ["🌍"]

    def test_differ_is_reusable(self):
        differ = WordDiffer()
        first = differ.diff("a b c", "a x c")
        second = differ.diff("a b c", "a x c")
        assert first == second


class TestWordSegment:
    def test_flags(self):
        assert WordSegment("x", SegmentStatus.ADDED).added
        assert WordSegment("x", SegmentStatus.REMOVED).removed
        assert not WordSegment("x").changed

    def test_word_count(self):
        assert WordSegment("  two words ").word_count == 2
        assert WordSegment("   ").word_count == 0
