"""Tunable thresholds for the diff pipeline.

The defaults encode product decisions about precision versus recall in
legal redlines. Change them only with evidence.
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ConfigError

# Minimum Dice word overlap for a fuzzy (modify) match
DEFAULT_SIMILARITY_THRESHOLD = 0.5

# Share of changed words a span needs to collapse into a phrase replacement
DEFAULT_PHRASE_DENSITY_THRESHOLD = 0.6
DEFAULT_PHRASE_MIN_CHANGED_WORDS = 3
DEFAULT_PHRASE_MAX_UNCHANGED_GAP = 1

# Characters of block text kept in diagnostic previews
DEFAULT_PREVIEW_LENGTH = 100


@dataclass(frozen=True)
class DiffConfig:
    """Configuration for DiffEngine.

    Attributes:
        similarity_threshold: Fuzzy match threshold in [0, 1]
        phrase_density_threshold: Phrase grouping density in [0, 1]
        phrase_min_changed_words: Minimum changed words to group a span
        phrase_max_unchanged_gap: Unchanged words tolerated inside a span
        preview_length: Length of text previews in alignment decisions
    """

    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    phrase_density_threshold: float = DEFAULT_PHRASE_DENSITY_THRESHOLD
    phrase_min_changed_words: int = DEFAULT_PHRASE_MIN_CHANGED_WORDS
    phrase_max_unchanged_gap: int = DEFAULT_PHRASE_MAX_UNCHANGED_GAP
    preview_length: int = DEFAULT_PREVIEW_LENGTH

    def __post_init__(self) -> None:
        for name in ("similarity_threshold", "phrase_density_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(name, value, "must be between 0 and 1")
        for name in (
            "phrase_min_changed_words",
            "phrase_max_unchanged_gap",
            "preview_length",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ConfigError(name, value, "must not be negative")
