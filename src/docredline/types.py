"""Data types for the docredline diff pipeline.

Defines all enums and dataclasses used throughout the package.
No logic — just types.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar

if sys.version_info >= (3, 11):
    from enum import StrEnum
else:

    class StrEnum(str, Enum):
        """Backport of StrEnum for Python 3.10."""

        pass


# --- Enums ---


class BlockType(StrEnum):
    """Kinds of document blocks delivered by the parser."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading1"
    HEADING_2 = "heading2"
    HEADING_3 = "heading3"
    TABLE = "table"
    TABLE_ROW = "table-row"
    PAGE_BREAK = "page-break"


class MatchType(StrEnum):
    """How the aligner paired (or failed to pair) a block."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    DELETE = "delete"
    INSERT = "insert"


class SegmentStatus(StrEnum):
    """Status of a word-level diff segment."""

    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"


class TextChangeType(StrEnum):
    """Kind of a per-segment text change in a formatting diff."""

    INSERT = "insert"
    DELETE = "delete"
    UNCHANGED = "unchanged"


class DiffType(StrEnum):
    """Kind of a block-level diff."""

    UNCHANGED = "unchanged"
    INSERT = "insert"
    DELETE = "delete"
    MODIFY = "modify"


# --- Document AST (input, produced by an external parser) ---


@dataclass(frozen=True)
class Formatting:
    """Optional formatting attributes of a run or block.

    ``None`` means the attribute is absent, which is not the same as an
    explicit ``False``.
    """

    ATTRIBUTES: ClassVar[tuple[str, ...]] = (
        "bold",
        "italic",
        "underline",
        "color",
        "font",
        "font_size",
    )

    bold: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    color: str | None = None
    font: str | None = None
    font_size: float | None = None

    def has_any(self) -> bool:
        """True if any attribute is set to a truthy value."""
        return any(getattr(self, name) for name in self.ATTRIBUTES)


@dataclass(frozen=True)
class TextRun:
    """A run of text sharing one formatting."""

    text: str
    formatting: Formatting = field(default_factory=Formatting)


@dataclass(frozen=True)
class Block:
    """A unit of document content.

    Attributes:
        id: Stable, content-derived identifier
        type: Block kind
        text: Normalized text (whitespace collapsed, trimmed)
        runs: Formatted text runs making up the block
        formatting: Block-level formatting
        table_id: Logical table this row belongs to (table-row only)
        row_index: Row position within its table (table-row only)
    """

    id: str
    type: BlockType
    text: str
    runs: tuple[TextRun, ...] = ()
    formatting: Formatting = field(default_factory=Formatting)
    table_id: str | None = None
    row_index: int | None = None


@dataclass
class DocumentMetadata:
    """Informational metadata. Never diffed."""

    author: str | None = None
    title: str | None = None
    created: datetime | None = None
    modified: datetime | None = None


@dataclass(frozen=True)
class SectionProperties:
    """Layout properties passed through to the renderer."""

    column_count: int | None = None
    column_space: int | None = None  # twips


@dataclass
class DocumentAST:
    """Ordered block sequence of one document version."""

    blocks: list[Block] = field(default_factory=list)
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    section_properties: SectionProperties | None = None


# --- Alignment (output of aligner, input to engine) ---


@dataclass(frozen=True)
class AlignedPair:
    """A pair of aligned indices from original and current lists.

    - (i, None) means original[i] was deleted
    - (None, j) means current[j] was inserted
    - (i, j) means original[i] matches current[j]
    """

    original_idx: int | None
    current_idx: int | None


@dataclass
class AlignmentDecision:
    """Diagnostic record of one aligner decision."""

    original_index: int | None
    current_index: int | None
    match_type: MatchType
    reason: str
    similarity: float | None = None
    original_preview: str | None = None
    current_preview: str | None = None


@dataclass
class Alignment:
    """Aligner output: ordered pairs plus the decisions that produced them."""

    pairs: list[AlignedPair] = field(default_factory=list)
    decisions: list[AlignmentDecision] = field(default_factory=list)


# --- Word and phrase level changes ---


@dataclass(frozen=True)
class WordSegment:
    """A word-level diff segment."""

    value: str
    status: SegmentStatus = SegmentStatus.UNCHANGED

    @property
    def added(self) -> bool:
        return self.status is SegmentStatus.ADDED

    @property
    def removed(self) -> bool:
        return self.status is SegmentStatus.REMOVED

    @property
    def changed(self) -> bool:
        return self.status is not SegmentStatus.UNCHANGED

    @property
    def word_count(self) -> int:
        return len(self.value.split())


@dataclass(frozen=True)
class PhraseReplacement:
    """A dense run of word changes collapsed into one before/after pair."""

    deleted_text: str
    inserted_text: str


GroupedChange = WordSegment | PhraseReplacement


# --- Formatting changes ---


@dataclass(frozen=True)
class AttributeChange:
    """Before/after values of one formatting attribute."""

    before: bool | str | float | None
    after: bool | str | float | None


@dataclass
class FormattingComparison:
    """Result of comparing two Formatting records."""

    changed: bool
    changes: dict[str, AttributeChange] = field(default_factory=dict)


@dataclass(frozen=True)
class TextChange:
    """A text segment with the formatting of the side it comes from."""

    type: TextChangeType
    text: str
    formatting: Formatting


@dataclass
class FormatChange:
    """An unchanged text segment whose formatting changed."""

    text: str
    before: Formatting
    after: Formatting
    changes: dict[str, AttributeChange] = field(default_factory=dict)


DiffChange = TextChange | FormatChange


# --- Diff result (output of engine) ---


@dataclass
class BlockDiff:
    """Diff of one aligned block pair.

    ``word_diff``, ``grouped_diff`` and ``format_diff`` are only populated
    when both sides exist and differ. ``change_id`` is set iff the type is
    not UNCHANGED.
    """

    type: DiffType
    original_block: Block | None = None
    current_block: Block | None = None
    word_diff: list[WordSegment] = field(default_factory=list)
    grouped_diff: list[GroupedChange] = field(default_factory=list)
    format_diff: list[DiffChange] = field(default_factory=list)
    change_id: str | None = None

    @property
    def is_change(self) -> bool:
        return self.type is not DiffType.UNCHANGED


@dataclass
class DocumentDiff:
    """Ordered block diffs of a whole document."""

    block_diffs: list[BlockDiff] = field(default_factory=list)
    total_changes: int = 0
    section_properties: SectionProperties | None = None

    def changes(self) -> list[BlockDiff]:
        """Block diffs that carry a change id, in document order."""
        return [bd for bd in self.block_diffs if bd.is_change]


@dataclass
class DiffResult:
    """A DocumentDiff together with the alignment decisions behind it."""

    diff: DocumentDiff
    alignment_decisions: list[AlignmentDecision] = field(default_factory=list)
