"""Tests for debug.py."""

import json
import logging
import re
from datetime import datetime, timedelta

import pytest

from docredline.debug import DebugExporter, DebugReport
from docredline.engine import DiffEngine
from docredline.exceptions import ReportExportError
from docredline.types import Block, BlockType, DocumentAST, Formatting


def _p(text: str, **formatting) -> Block:
    return Block(
        id=f"p-{text[:8]}",
        type=BlockType.PARAGRAPH,
        text=text,
        formatting=Formatting(**formatting),
    )


def _doc(*texts: str) -> DocumentAST:
    return DocumentAST(blocks=[_p(t) for t in texts])


def _report(original: DocumentAST, current: DocumentAST) -> DebugReport:
    result = DiffEngine().diff_documents_with_debug(original, current)
    return DebugExporter().generate_report(
        original, current, result, "original.docx", "current.docx"
    )


class TestGenerateReport:
    def test_file_names_and_timestamp(self):
        report = _report(_doc("Hello"), _doc("Hello"))
        assert report.original_file == "original.docx"
        assert report.current_file == "current.docx"
        assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z", report.timestamp)
        parsed = datetime.strptime(report.timestamp, "%Y-%m-%dT%H:%M:%S.%f%z")
        assert parsed.utcoffset() == timedelta(0)

    def test_parsing_block_counts(self):
        report = _report(_doc("A", "B", "C"), _doc("A", "B", "C", "D"))
        assert report.parsing.original.block_count == 3
        assert report.parsing.current.block_count == 4
        assert [b.index for b in report.parsing.current.blocks] == [0, 1, 2, 3]

    def test_block_debug_fields(self):
        original = DocumentAST(blocks=[_p("A" * 200, bold=True)])
        report = _report(original, _doc())
        block = report.parsing.original.blocks[0]
        assert block.type == "paragraph"
        assert block.text_preview == "A" * 100
        assert block.text_length == 200
        assert block.word_count == 1
        assert block.has_formatting

    def test_explicit_false_is_not_formatting(self):
        report = _report(DocumentAST(blocks=[_p("x", bold=False)]), _doc())
        assert not report.parsing.original.blocks[0].has_formatting

    def test_alignment_statistics(self):
        report = _report(
            _doc("Same", "Modified text here", "Deleted"),
            _doc("Same", "Modified text changed", "Inserted"),
        )
        alignment = report.alignment
        assert alignment.exact_matches == 1
        assert alignment.fuzzy_matches == 1
        assert alignment.deletions == 1
        assert alignment.insertions == 1
        assert len(alignment.decisions) == 4

    def test_diff_section_has_full_text(self):
        report = _report(_doc("Original text"), _doc("Modified text"))
        modified = report.diffs[0]
        assert modified.type == "modify"
        assert modified.change_id == "change-0"
        assert modified.original_text == "Original text"
        assert modified.current_text == "Modified text"

    def test_word_diff_summary(self):
        report = _report(_doc("One two three"), _doc("One NEW three ADDED"))
        modified = next(d for d in report.diffs if d.type == "modify")
        summary = modified.word_diff_summary
        assert summary is not None
        assert summary.added_words == 2
        assert summary.removed_words == 1
        assert summary.unchanged_words == 2

    def test_unchanged_block_has_no_summary(self):
        report = _report(_doc("Same"), _doc("Same"))
        assert report.diffs[0].word_diff_summary is None
        assert report.diffs[0].change_id is None

    def test_empty_documents(self):
        report = _report(_doc(), _doc())
        assert report.parsing.original.block_count == 0
        assert report.alignment.decisions == []
        assert report.diffs == []


class TestJson:
    def test_camel_case_keys(self):
        report = _report(_doc("Hello world"), _doc("Hello beautiful world"))
        data = json.loads(DebugExporter().to_json(report))
        assert set(data) == {
            "timestamp",
            "originalFile",
            "currentFile",
            "parsing",
            "alignment",
            "diffs",
        }
        assert data["parsing"]["original"]["blockCount"] == 1
        decision = data["alignment"]["decisions"][0]
        assert decision["matchType"] == "fuzzy"
        assert decision["similarityScore"] >= 0.5
        assert data["diffs"][0]["wordDiffSummary"]["addedWords"] == 1

    def test_roundtrip(self):
        report = _report(_doc("A", "B"), _doc("A", "C"))
        restored = DebugReport.model_validate_json(DebugExporter().to_json(report))
        assert restored == report


class TestExportToFile:
    def test_writes_json_file(self, tmp_path, caplog):
        caplog.set_level(logging.INFO, logger="docredline")
        report = _report(_doc("Hello"), _doc("Hello"))
        path = DebugExporter().export_to_file(report, tmp_path / "reports")

        assert path.parent == tmp_path / "reports"
        assert path.name.startswith("debug-report-")
        assert path.suffix == ".json"
        assert ":" not in path.name
        assert json.loads(path.read_text(encoding="utf-8"))["originalFile"] == (
            "original.docx"
        )
        assert any("Wrote debug report" in r.getMessage() for r in caplog.records)

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")
        report = _report(_doc("Hello"), _doc("Hello"))

        with pytest.raises(ReportExportError) as exc_info:
            DebugExporter().export_to_file(report, blocker)
        assert exc_info.value.path.startswith(str(blocker))
        assert isinstance(exc_info.value.__cause__, OSError)
