"""Top-level orchestrator for the docredline diff pipeline.

Pipeline:
1. Align original and current blocks → ordered pairs
2. For each pair with both sides differing:
   word diff → phrase grouping, plus formatting diff
3. Assemble BlockDiffs and assign change ids in final order
"""

from __future__ import annotations

import logging

from .aligner import BlockAligner, normalize_text
from .config import DiffConfig
from .formatting import compare_formatting, diff_formatting, formattings_equal
from .phrase_grouper import PhraseGrouper
from .types import (
    AlignedPair,
    Block,
    BlockDiff,
    DiffResult,
    DiffType,
    DocumentAST,
    DocumentDiff,
)
from .word_diff import WordDiffer

logger = logging.getLogger(__name__)

CHANGE_ID_PREFIX = "change-"


class DiffEngine:
    """Compares two DocumentASTs.

    The engine holds only configuration and stateless collaborators, so a
    single instance can be shared between concurrent comparisons.
    """

    def __init__(self, config: DiffConfig | None = None, debug: bool = False) -> None:
        self.config = config or DiffConfig()
        self.debug = debug
        self._aligner = BlockAligner(
            similarity_threshold=self.config.similarity_threshold,
            preview_length=self.config.preview_length,
        )
        self._grouper = PhraseGrouper(
            density_threshold=self.config.phrase_density_threshold,
            min_changed_words=self.config.phrase_min_changed_words,
            max_unchanged_gap=self.config.phrase_max_unchanged_gap,
        )
        self._word_differ = WordDiffer()

    def diff_documents(self, original: DocumentAST, current: DocumentAST) -> DocumentDiff:
        """Diff two documents and return the ordered DocumentDiff."""
        return self.diff_documents_with_debug(original, current).diff

    def diff_documents_with_debug(
        self, original: DocumentAST, current: DocumentAST
    ) -> DiffResult:
        """Diff two documents and return the diff with its alignment decisions."""
        alignment = self._aligner.align(original.blocks, current.blocks)

        if self.debug:
            for decision in alignment.decisions:
                logger.debug(
                    "Alignment %s: original=%s current=%s similarity=%s (%s)",
                    decision.match_type.value,
                    decision.original_index,
                    decision.current_index,
                    decision.similarity,
                    decision.reason,
                )

        block_diffs: list[BlockDiff] = []
        next_id = 0
        for pair in alignment.pairs:
            block_diff = self._diff_pair(pair, original.blocks, current.blocks)
            if block_diff.is_change:
                block_diff.change_id = f"{CHANGE_ID_PREFIX}{next_id}"
                next_id += 1
            block_diffs.append(block_diff)

        diff = DocumentDiff(
            block_diffs=block_diffs,
            total_changes=next_id,
            # Layout follows the current document
            section_properties=current.section_properties,
        )

        logger.debug(
            "Compared %d original / %d current blocks: %d changes",
            len(original.blocks),
            len(current.blocks),
            diff.total_changes,
        )

        return DiffResult(diff=diff, alignment_decisions=alignment.decisions)

    def _diff_pair(
        self, pair: AlignedPair, original: list[Block], current: list[Block]
    ) -> BlockDiff:
        """Build the BlockDiff of one aligned pair (change id not yet assigned)."""
        if pair.original_idx is None and pair.current_idx is not None:
            return BlockDiff(DiffType.INSERT, current_block=current[pair.current_idx])
        if pair.original_idx is not None and pair.current_idx is None:
            return BlockDiff(DiffType.DELETE, original_block=original[pair.original_idx])
        assert pair.original_idx is not None and pair.current_idx is not None

        orig = original[pair.original_idx]
        curr = current[pair.current_idx]

        if normalize_text(orig.text) == normalize_text(curr.text) and formattings_equal(
            orig.formatting, curr.formatting
        ):
            return BlockDiff(DiffType.UNCHANGED, original_block=orig, current_block=curr)

        return self._diff_modified(orig, curr)

    def _diff_modified(self, orig: Block, curr: Block) -> BlockDiff:
        """Word, phrase and formatting diff of a matched pair that differs."""
        word_diff = self._word_differ.diff(orig.text, curr.text)
        grouped_diff = self._grouper.group(word_diff)
        format_diff = diff_formatting(orig, curr, word_diff)

        text_changed = any(segment.changed for segment in word_diff)
        format_changed = compare_formatting(orig.formatting, curr.formatting).changed

        return BlockDiff(
            type=DiffType.MODIFY if text_changed or format_changed else DiffType.UNCHANGED,
            original_block=orig,
            current_block=curr,
            word_diff=word_diff,
            grouped_diff=grouped_diff,
            format_diff=format_diff,
        )
