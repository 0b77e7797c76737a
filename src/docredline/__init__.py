"""docredline - Block, word and formatting diffs for document redlining.

This library compares two parsed versions of a document and describes
every change: blocks added, removed or rewritten, the words changed inside
rewritten blocks, and formatting attribute changes.
"""

__version__ = "0.1.0"

from docredline.aligner import BlockAligner, block_similarity, normalize_text
from docredline.block_id import block_id
from docredline.config import DiffConfig
from docredline.debug import DebugExporter, DebugReport
from docredline.engine import DiffEngine
from docredline.exceptions import ConfigError, DocRedlineError, ReportExportError
from docredline.formatting import compare_formatting, diff_formatting, formattings_equal
from docredline.phrase_grouper import PhraseGrouper, group_consecutive_changes
from docredline.types import (
    AlignedPair,
    Alignment,
    AlignmentDecision,
    AttributeChange,
    Block,
    BlockDiff,
    BlockType,
    DiffChange,
    DiffResult,
    DiffType,
    DocumentAST,
    DocumentDiff,
    DocumentMetadata,
    FormatChange,
    Formatting,
    FormattingComparison,
    GroupedChange,
    MatchType,
    PhraseReplacement,
    SectionProperties,
    SegmentStatus,
    TextChange,
    TextChangeType,
    TextRun,
    WordSegment,
)
from docredline.word_diff import WordDiffer, diff_words

__all__ = [
    "AlignedPair",
    "Alignment",
    "AlignmentDecision",
    "AttributeChange",
    "Block",
    "BlockAligner",
    "BlockDiff",
    "BlockType",
    "ConfigError",
    "DebugExporter",
    "DebugReport",
    "DiffChange",
    "DiffConfig",
    "DiffEngine",
    "DiffResult",
    "DiffType",
    "DocRedlineError",
    "DocumentAST",
    "DocumentDiff",
    "DocumentMetadata",
    "FormatChange",
    "Formatting",
    "FormattingComparison",
    "GroupedChange",
    "MatchType",
    "PhraseGrouper",
    "PhraseReplacement",
    "ReportExportError",
    "SectionProperties",
    "SegmentStatus",
    "TextChange",
    "TextChangeType",
    "TextRun",
    "WordDiffer",
    "WordSegment",
    "block_id",
    "block_similarity",
    "compare_formatting",
    "diff_formatting",
    "diff_words",
    "formattings_equal",
    "group_consecutive_changes",
    "normalize_text",
]
