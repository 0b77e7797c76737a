"""Block alignment between two document versions.

Two-pass greedy alignment:
1. Exact match on whitespace-normalized text (hash-based, first unused wins)
2. Fuzzy match on word-set overlap (Dice coefficient) for the remainder

Unmatched originals become deletions, unmatched current blocks become
insertions. Pairs are returned in original-document order with trailing
insertions in current-document order.
"""

from __future__ import annotations

import logging
import math
import re
from collections import Counter, defaultdict

from .config import DEFAULT_PREVIEW_LENGTH, DEFAULT_SIMILARITY_THRESHOLD
from .types import AlignedPair, Alignment, AlignmentDecision, Block, MatchType

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    return _WHITESPACE_RE.sub(" ", text.strip())


def word_set(text: str) -> frozenset[str]:
    """Distinct words of the normalized text."""
    return frozenset(normalize_text(text).split())


def dice_similarity(
    key1: str, words1: frozenset[str], key2: str, words2: frozenset[str]
) -> float:
    """Dice coefficient over precomputed normalized keys and word sets."""
    if key1 == key2:
        return 1.0
    if not key1 or not key2:
        return 0.0
    overlap = len(words1 & words2)
    return (2 * overlap) / (len(words1) + len(words2))


def block_similarity(a: Block, b: Block) -> float:
    """Word overlap between two blocks on a 0-1 scale.

    1.0 when the normalized texts are identical, 0.0 when either is empty,
    otherwise 2·|S1 ∩ S2| / (|S1| + |S2|) over distinct words.
    """
    key_a = normalize_text(a.text)
    key_b = normalize_text(b.text)
    return dice_similarity(key_a, frozenset(key_a.split()), key_b, frozenset(key_b.split()))


class BlockAligner:
    """Aligns blocks from original and current lists for comparison."""

    def __init__(
        self,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        preview_length: int = DEFAULT_PREVIEW_LENGTH,
    ) -> None:
        self.similarity_threshold = similarity_threshold
        self.preview_length = preview_length

    def align(self, original: list[Block], current: list[Block]) -> Alignment:
        """Align two block lists.

        Returns an Alignment whose pairs cover every block of both inputs
        exactly once:
        - (i, None) means original[i] was deleted
        - (None, j) means current[j] was inserted
        - (i, j) means original[i] matches current[j]
        """
        original_keys = [normalize_text(b.text) for b in original]
        current_keys = [normalize_text(b.text) for b in current]

        pairs: list[AlignedPair] = []
        decisions: list[AlignmentDecision] = []
        used_current: set[int] = set()

        # --- Pass 1: Exact normalized-text matches ---
        current_by_key: dict[str, list[int]] = defaultdict(list)
        for j, key in enumerate(current_keys):
            current_by_key[key].append(j)

        unmatched: list[int] = []
        for i, key in enumerate(original_keys):
            candidates = current_by_key.get(key)
            if candidates:
                # Candidates are consumed in current-document order
                j = candidates.pop(0)
                used_current.add(j)
                pairs.append(AlignedPair(i, j))
                decisions.append(
                    AlignmentDecision(
                        original_index=i,
                        current_index=j,
                        match_type=MatchType.EXACT,
                        similarity=1.0,
                        reason="Exact text match after whitespace normalization",
                        original_preview=self._preview(original[i]),
                        current_preview=self._preview(current[j]),
                    )
                )
            else:
                unmatched.append(i)

        # --- Pass 2: Fuzzy word-overlap matches ---
        if unmatched:
            original_words = {i: frozenset(original_keys[i].split()) for i in unmatched}
            current_words = [frozenset(key.split()) for key in current_keys]

            for i in unmatched:
                best_j: int | None = None
                best_score = 0.0
                for j in range(len(current)):
                    if j in used_current:
                        continue
                    score = dice_similarity(
                        original_keys[i],
                        original_words[i],
                        current_keys[j],
                        current_words[j],
                    )
                    if best_j is None or score > best_score:
                        best_j = j
                        best_score = score

                if best_j is not None and best_score >= self.similarity_threshold:
                    used_current.add(best_j)
                    pairs.append(AlignedPair(i, best_j))
                    decisions.append(
                        AlignmentDecision(
                            original_index=i,
                            current_index=best_j,
                            match_type=MatchType.FUZZY,
                            similarity=best_score,
                            reason=(
                                f"Fuzzy match: {best_score * 100:.1f}% word overlap "
                                f"(threshold: {self.similarity_threshold * 100:g}%)"
                            ),
                            original_preview=self._preview(original[i]),
                            current_preview=self._preview(current[best_j]),
                        )
                    )
                    continue

                pairs.append(AlignedPair(i, None))
                if best_j is not None and best_score > 0:
                    reason = (
                        f"No match found. Best candidate had {best_score * 100:.1f}% "
                        f"similarity (below {self.similarity_threshold * 100:g}% threshold)"
                    )
                else:
                    reason = "No match found. No unmatched candidates remaining"
                decisions.append(
                    AlignmentDecision(
                        original_index=i,
                        current_index=None,
                        match_type=MatchType.DELETE,
                        similarity=best_score if best_score > 0 else None,
                        reason=reason,
                        original_preview=self._preview(original[i]),
                    )
                )

        # --- Leftover current blocks are insertions ---
        for j in range(len(current)):
            if j not in used_current:
                pairs.append(AlignedPair(None, j))
                decisions.append(
                    AlignmentDecision(
                        original_index=None,
                        current_index=j,
                        match_type=MatchType.INSERT,
                        reason="No matching block in original document",
                        current_preview=self._preview(current[j]),
                    )
                )

        pairs.sort(key=_order_key)

        if logger.isEnabledFor(logging.DEBUG):
            counts = Counter(d.match_type for d in decisions)
            logger.debug(
                "Aligned %d original / %d current blocks: "
                "%d exact, %d fuzzy, %d deleted, %d inserted",
                len(original),
                len(current),
                counts[MatchType.EXACT],
                counts[MatchType.FUZZY],
                counts[MatchType.DELETE],
                counts[MatchType.INSERT],
            )

        return Alignment(pairs=pairs, decisions=decisions)

    def _preview(self, block: Block) -> str:
        return block.text[: self.preview_length]


def _order_key(pair: AlignedPair) -> tuple[float, float]:
    """Original order first; insertions after all originals, in current order."""
    o = math.inf if pair.original_idx is None else pair.original_idx
    c = math.inf if pair.current_idx is None else pair.current_idx
    return (o, c)
