"""Unit tests for corpus-level lint runs, persistence, and counter aggregation."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from reportlint.config import LintConfig
from reportlint.errors import LintStageError
from reportlint.io.corpus import DocumentStore, discover_documents
from reportlint.models.datatypes import CitationCounters, HeadingCounters
from reportlint.runner import create_citation_run, create_heading_run
from reportlint.telemetry.logger import RunLogger


def test_discover_documents_walks_nested_dirs_and_filters_extensions(write_corpus) -> None:
    """Discovery should be recursive, sorted, and extension-filtered."""

    reports_dir = write_corpus(
        {
            "b/report.qmd": "",
            "top.QMD": "",
            "notes.md": "",
            "a/deep/child.qmd": "",
        }
    )

    paths = discover_documents(reports_dir)

    assert [path.relative_to(reports_dir).as_posix() for path in paths] == [
        "a/deep/child.qmd",
        "b/report.qmd",
        "top.QMD",
    ]


def test_discover_documents_rejects_missing_root(tmp_path: Path) -> None:
    """A missing reports directory should raise `FileNotFoundError`."""

    with pytest.raises(FileNotFoundError, match="Reports directory not found"):
        discover_documents(tmp_path / "missing")


def test_document_store_round_trips_text_verbatim(tmp_path: Path) -> None:
    """Store should not translate line endings on load or save."""

    store = DocumentStore(tmp_path)
    path = tmp_path / "doc.qmd"

    store.save_text(path, "a\r\nb\n")

    assert store.load_text(path) == "a\r\nb\n"
    assert store.display_path(path) == "doc.qmd"


def test_citation_run_dry_run_reports_without_writing(write_corpus, read_document) -> None:
    """Preview mode should report changes and leave documents untouched."""

    original = "Intro \\[@a\\] and [@b][@c].\n"
    reports_dir = write_corpus({"one.qmd": original, "clean.qmd": "Nothing here.\n"})
    sink = io.StringIO()

    summary = create_citation_run(
        LintConfig(reports_dir=reports_dir),
        logger=RunLogger("citations", sink=sink),
    ).run()

    assert summary.apply_changes is False
    assert summary.files_scanned == 2
    assert [result.display_path for result in summary.results] == ["reports/one.qmd"]
    assert summary.counters == CitationCounters(escapes_fixed=1, citations_merged=1)
    assert read_document(reports_dir / "one.qmd") == original
    assert "event=start" in sink.getvalue()
    assert "mode=dry_run" in sink.getvalue()
    assert "event=write" not in sink.getvalue()


def test_citation_run_apply_mode_writes_changed_files_and_sums_counters(
    write_corpus, read_document
) -> None:
    """Apply mode should write only changed files and count them."""

    reports_dir = write_corpus(
        {
            "a.qmd": "one \\[@a\\]\r\ntwo [@b] [@c]\r\n",
            "b/flag.qmd": "Only a flag [@s].[^1]\n",
            "b/merge.qmd": "[@x][@y][@z]",
        }
    )
    sink = io.StringIO()

    summary = create_citation_run(
        LintConfig(reports_dir=reports_dir, apply_changes=True),
        logger=RunLogger("citations", sink=sink),
    ).run()

    assert read_document(reports_dir / "a.qmd") == "one [@a]\r\ntwo [@b; @c]\r\n"
    assert read_document(reports_dir / "b/flag.qmd") == "Only a flag [@s].[^1]\n"
    assert read_document(reports_dir / "b/merge.qmd") == "[@x; @y; @z]"
    assert summary.counters == CitationCounters(
        escapes_fixed=1,
        citations_merged=3,
        manual_flags=1,
        files_changed=2,
    )
    written = {result.display_path: result.written for result in summary.results}
    assert written == {
        "reports/a.qmd": True,
        "reports/b/flag.qmd": False,
        "reports/b/merge.qmd": True,
    }
    assert "event=write path=reports/a.qmd" in sink.getvalue()
    assert "files_changed=2" in sink.getvalue()


def test_citation_run_second_pass_is_noop(write_corpus) -> None:
    """Running apply mode twice should change nothing on the second run."""

    reports_dir = write_corpus({"a.qmd": "\\[@a\\][@b] [@c]\n"})
    config = LintConfig(reports_dir=reports_dir, apply_changes=True)

    create_citation_run(config, logger=RunLogger("citations", sink=io.StringIO())).run()
    summary = create_citation_run(
        config, logger=RunLogger("citations", sink=io.StringIO())
    ).run()

    assert summary.counters == CitationCounters()
    assert summary.results == ()


def test_heading_run_apply_mode_rewrites_headings(write_corpus, read_document) -> None:
    """Heading runs should share the runner persistence rules."""

    reports_dir = write_corpus({"h.qmd": "# **1. Intro**\n## 2020 Review\n"})

    summary = create_heading_run(
        LintConfig(reports_dir=reports_dir, apply_changes=True),
        logger=RunLogger("headings", sink=io.StringIO()),
    ).run()

    assert read_document(reports_dir / "h.qmd") == "# Intro\n## 2020 Review\n"
    assert summary.counters == HeadingCounters(
        bold_removed=1, numbers_removed=1, files_changed=1
    )


def test_run_maps_missing_reports_dir_to_stage_error(tmp_path: Path) -> None:
    """A missing reports directory should surface as a `discover` stage error."""

    sink = io.StringIO()
    run = create_citation_run(
        LintConfig(reports_dir=tmp_path / "nope"),
        logger=RunLogger("citations", sink=sink),
    )

    with pytest.raises(LintStageError) as exc_info:
        run.run()

    assert exc_info.value.stage == "discover"
    assert "event=failure" in sink.getvalue()
    assert "stage=discover" in sink.getvalue()


def test_run_maps_undecodable_document_to_read_error(write_corpus) -> None:
    """Non-UTF-8 documents should surface as a `read` stage error."""

    reports_dir = write_corpus({})
    (reports_dir / "bad.qmd").write_bytes(b"\xff\xfe\xfa")

    run = create_citation_run(
        LintConfig(reports_dir=reports_dir),
        logger=RunLogger("citations", sink=io.StringIO()),
    )

    with pytest.raises(LintStageError) as exc_info:
        run.run()

    assert exc_info.value.stage == "read"
    assert "reports/bad.qmd" in exc_info.value.detail


def test_run_maps_write_failures_to_stage_error(write_corpus, monkeypatch) -> None:
    """Persistence failures in apply mode should propagate as `write` stage errors."""

    reports_dir = write_corpus({"a.qmd": "[@a][@b]"})

    def _failing_save(self, path, content):
        raise PermissionError("read-only file system")

    monkeypatch.setattr(DocumentStore, "save_text", _failing_save)
    run = create_citation_run(
        LintConfig(reports_dir=reports_dir, apply_changes=True),
        logger=RunLogger("citations", sink=io.StringIO()),
    )

    with pytest.raises(LintStageError) as exc_info:
        run.run()

    assert exc_info.value.stage == "write"
    assert "read-only file system" in exc_info.value.detail
