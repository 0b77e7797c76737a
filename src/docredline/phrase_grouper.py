"""Phrase-level grouping of dense word changes.

Heavily rewritten sentences read poorly as a long chain of alternating
word insertions and deletions. The grouper collapses such runs into one
PhraseReplacement carrying the whole before/after phrase, while short
isolated substitutions stay as individual segments.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import (
    DEFAULT_PHRASE_DENSITY_THRESHOLD,
    DEFAULT_PHRASE_MAX_UNCHANGED_GAP,
    DEFAULT_PHRASE_MIN_CHANGED_WORDS,
)
from .types import GroupedChange, PhraseReplacement, WordSegment


@dataclass(frozen=True)
class ChangeSpan:
    """Half-open range [start, end) of segments forming one candidate phrase."""

    start: int
    end: int
    changed_words: int
    total_words: int

    @property
    def density(self) -> float:
        if self.total_words == 0:
            return 0.0
        return self.changed_words / self.total_words


class PhraseGrouper:
    """Groups dense runs of word changes into phrase replacements."""

    def __init__(
        self,
        density_threshold: float = DEFAULT_PHRASE_DENSITY_THRESHOLD,
        min_changed_words: int = DEFAULT_PHRASE_MIN_CHANGED_WORDS,
        max_unchanged_gap: int = DEFAULT_PHRASE_MAX_UNCHANGED_GAP,
    ) -> None:
        self.density_threshold = density_threshold
        self.min_changed_words = min_changed_words
        self.max_unchanged_gap = max_unchanged_gap

    def group(self, segments: list[WordSegment]) -> list[GroupedChange]:
        """Group a word diff.

        Unchanged segments outside a span pass through. A span that clears
        both the density and the minimum-changed-words gate becomes one
        PhraseReplacement; otherwise only its first change is emitted and
        scanning resumes at the next segment.
        """
        result: list[GroupedChange] = []
        i = 0

        while i < len(segments):
            segment = segments[i]
            if not segment.changed:
                result.append(segment)
                i += 1
                continue

            span = self.find_span(segments, i)
            if self.should_group(span):
                result.append(self._replacement(segments[span.start : span.end]))
                i = span.end
            else:
                result.append(segment)
                i += 1

        return result

    def find_span(self, segments: list[WordSegment], start: int) -> ChangeSpan:
        """Extend a span from a change until the unchanged gap grows too large."""
        end = start
        gap = 0
        changed_words = 0
        total_words = 0

        while end < len(segments):
            segment = segments[end]
            words = segment.word_count
            if segment.changed:
                gap = 0
                changed_words += words
            else:
                gap += words
                if gap > self.max_unchanged_gap:
                    break
            total_words += words
            end += 1

        return ChangeSpan(start, end, changed_words, total_words)

    def should_group(self, span: ChangeSpan) -> bool:
        return (
            span.density >= self.density_threshold
            and span.changed_words >= self.min_changed_words
        )

    @staticmethod
    def _replacement(segments: list[WordSegment]) -> PhraseReplacement:
        deleted: list[str] = []
        inserted: list[str] = []
        for segment in segments:
            if segment.removed:
                deleted.append(segment.value)
            elif segment.added:
                inserted.append(segment.value)
            else:
                # Shared context belongs to both sides
                deleted.append(segment.value)
                inserted.append(segment.value)
        return PhraseReplacement(
            deleted_text="".join(deleted).strip(),
            inserted_text="".join(inserted).strip(),
        )


def group_consecutive_changes(segments: list[WordSegment]) -> list[GroupedChange]:
    """Group a word diff with the default thresholds."""
    return PhraseGrouper().group(segments)
