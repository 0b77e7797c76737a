"""Debug reports for diff diagnostics.

A DebugReport captures the parsed block lists, every alignment decision
and a per-block summary of the resulting diff. Reports serialize to JSON
with camelCase keys so they can be attached to bug reports and read by the
same tooling that consumes the renderer's data.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .config import DEFAULT_PREVIEW_LENGTH
from .exceptions import ReportExportError
from .types import (
    AlignmentDecision,
    Block,
    BlockDiff,
    DiffResult,
    DocumentAST,
    MatchType,
    SegmentStatus,
)

logger = logging.getLogger(__name__)


class BlockDebug(BaseModel):
    """Summary of one parsed block."""

    model_config = ConfigDict(populate_by_name=True)

    index: int
    type: str
    text_preview: str = Field(alias="textPreview")
    text_length: int = Field(alias="textLength")
    word_count: int = Field(alias="wordCount")
    has_formatting: bool = Field(alias="hasFormatting")


class DocumentParsingDebug(BaseModel):
    """Block summaries of one document version."""

    model_config = ConfigDict(populate_by_name=True)

    block_count: int = Field(alias="blockCount")
    blocks: list[BlockDebug] = Field(default_factory=list)


class ParsingDebug(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original: DocumentParsingDebug
    current: DocumentParsingDebug


class AlignmentDecisionDebug(BaseModel):
    """Serializable form of an AlignmentDecision."""

    model_config = ConfigDict(populate_by_name=True)

    original_index: int | None = Field(None, alias="originalIndex")
    current_index: int | None = Field(None, alias="currentIndex")
    match_type: MatchType = Field(alias="matchType")
    similarity_score: float | None = Field(None, alias="similarityScore")
    reason: str
    original_preview: str | None = Field(None, alias="originalPreview")
    current_preview: str | None = Field(None, alias="currentPreview")


class AlignmentDebug(BaseModel):
    """Alignment statistics plus the full decision list."""

    model_config = ConfigDict(populate_by_name=True)

    exact_matches: int = Field(0, alias="exactMatches")
    fuzzy_matches: int = Field(0, alias="fuzzyMatches")
    deletions: int = 0
    insertions: int = 0
    decisions: list[AlignmentDecisionDebug] = Field(default_factory=list)


class WordDiffSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    added_words: int = Field(0, alias="addedWords")
    removed_words: int = Field(0, alias="removedWords")
    unchanged_words: int = Field(0, alias="unchangedWords")


class BlockDiffDebug(BaseModel):
    """Full-text view of one block diff."""

    model_config = ConfigDict(populate_by_name=True)

    change_id: str | None = Field(None, alias="changeId")
    type: str
    original_text: str | None = Field(None, alias="originalText")
    current_text: str | None = Field(None, alias="currentText")
    word_diff_summary: WordDiffSummary | None = Field(None, alias="wordDiffSummary")


class DebugReport(BaseModel):
    """Complete diagnostic report of one comparison."""

    model_config = ConfigDict(populate_by_name=True)

    timestamp: str
    original_file: str = Field(alias="originalFile")
    current_file: str = Field(alias="currentFile")
    parsing: ParsingDebug
    alignment: AlignmentDebug
    diffs: list[BlockDiffDebug] = Field(default_factory=list)


class DebugExporter:
    """Builds debug reports and writes them to disk."""

    def __init__(self, preview_length: int = DEFAULT_PREVIEW_LENGTH) -> None:
        self.preview_length = preview_length

    def generate_report(
        self,
        original: DocumentAST,
        current: DocumentAST,
        result: DiffResult,
        original_file: str,
        current_file: str,
    ) -> DebugReport:
        """Build a report from both inputs and the engine's DiffResult."""
        return DebugReport(
            timestamp=_utc_timestamp(),
            original_file=original_file,
            current_file=current_file,
            parsing=ParsingDebug(
                original=self._parsing_debug(original),
                current=self._parsing_debug(current),
            ),
            alignment=self._alignment_debug(result.alignment_decisions),
            diffs=[self._block_diff_debug(bd) for bd in result.diff.block_diffs],
        )

    def to_json(self, report: DebugReport) -> str:
        return report.model_dump_json(by_alias=True, exclude_none=True, indent=2)

    def export_to_file(self, report: DebugReport, directory: str | Path) -> Path:
        """Write the report as debug-report-<timestamp>.json in a directory.

        Raises:
            ReportExportError: If the directory or file cannot be written.
        """
        stamp = report.timestamp.replace(":", "-").replace(".", "-")
        path = Path(directory) / f"debug-report-{stamp}.json"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.to_json(report), encoding="utf-8")
        except OSError as e:
            raise ReportExportError(str(path), str(e)) from e

        logger.info("Wrote debug report to %s", path)
        return path

    def _parsing_debug(self, doc: DocumentAST) -> DocumentParsingDebug:
        return DocumentParsingDebug(
            block_count=len(doc.blocks),
            blocks=[self._block_debug(b, i) for i, b in enumerate(doc.blocks)],
        )

    def _block_debug(self, block: Block, index: int) -> BlockDebug:
        return BlockDebug(
            index=index,
            type=block.type.value,
            text_preview=block.text[: self.preview_length],
            text_length=len(block.text),
            word_count=len(block.text.split()),
            has_formatting=block.formatting.has_any(),
        )

    @staticmethod
    def _alignment_debug(decisions: list[AlignmentDecision]) -> AlignmentDebug:
        counts = Counter(d.match_type for d in decisions)
        return AlignmentDebug(
            exact_matches=counts[MatchType.EXACT],
            fuzzy_matches=counts[MatchType.FUZZY],
            deletions=counts[MatchType.DELETE],
            insertions=counts[MatchType.INSERT],
            decisions=[
                AlignmentDecisionDebug(
                    original_index=d.original_index,
                    current_index=d.current_index,
                    match_type=d.match_type,
                    similarity_score=d.similarity,
                    reason=d.reason,
                    original_preview=d.original_preview,
                    current_preview=d.current_preview,
                )
                for d in decisions
            ],
        )

    @staticmethod
    def _block_diff_debug(block_diff: BlockDiff) -> BlockDiffDebug:
        summary = None
        if block_diff.word_diff:
            words: Counter[SegmentStatus] = Counter()
            for segment in block_diff.word_diff:
                words[segment.status] += segment.word_count
            summary = WordDiffSummary(
                added_words=words[SegmentStatus.ADDED],
                removed_words=words[SegmentStatus.REMOVED],
                unchanged_words=words[SegmentStatus.UNCHANGED],
            )

        return BlockDiffDebug(
            change_id=block_diff.change_id,
            type=block_diff.type.value,
            original_text=block_diff.original_block.text
            if block_diff.original_block
            else None,
            current_text=block_diff.current_block.text
            if block_diff.current_block
            else None,
            word_diff_summary=summary,
        )


def _utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with milliseconds and a Z suffix."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")
