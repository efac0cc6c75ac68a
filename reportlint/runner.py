"""Corpus-level lint run orchestration.

Responsibilities:
- Discover report documents and lint each one independently.
- Write fixed documents back only in apply mode and only when text changed.
- Sum per-file counters into one run summary.

Key types:
- `LintRun`: generic runner over any linter exposing `lint(text)`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .config import LintConfig
from .errors import STAGE_DISCOVER, STAGE_READ, STAGE_WRITE, LintStageError
from .io.corpus import DocumentStore, discover_documents
from .models.datatypes import (
    ChangeRecord,
    CitationCounters,
    FileLintResult,
    HeadingCounters,
    LintCounters,
    LintRunSummary,
)
from .telemetry.logger import RunLogger
from .text.citations import CitationNormalizer
from .text.headings import HeadingLinter


class LintReport(Protocol):
    """Protocol for linter outputs consumed by `LintRun`."""

    text: str
    records: tuple[ChangeRecord, ...]
    counters: LintCounters


class DocumentLinter(Protocol):
    """Protocol for per-document linters."""

    command_name: str

    def lint(self, text: str) -> LintReport:
        """Lint one document buffer without performing I/O."""


class LintRun:
    """Run one linter over every document in a report corpus."""

    def __init__(
        self,
        linter: DocumentLinter,
        config: LintConfig,
        empty_counters: LintCounters,
        logger: RunLogger | None = None,
        project_root: Path | None = None,
    ) -> None:
        """Initialize run dependencies.

        Args:
            linter: Per-document linter.
            config: Effective lint configuration.
            empty_counters: Zero value used as the summation start.
            logger: Structured event logger.
            project_root: Directory used for display paths; defaults to the
                parent of `config.reports_dir`.
        """

        self.linter = linter
        self.config = config
        self.empty_counters = empty_counters
        self.logger = logger or RunLogger(linter.command_name)
        root = project_root if project_root is not None else config.reports_dir.parent
        self.store = DocumentStore(root)

    def run(self) -> LintRunSummary:
        """Lint all documents and return the aggregated summary."""

        self.logger.log_run_start(self.config.reports_dir, self.config.apply_changes)
        try:
            paths = discover_documents(self.config.reports_dir, self.config.extensions)
        except FileNotFoundError as exc:
            self.logger.log_stage_failure(STAGE_DISCOVER, type(exc).__name__)
            raise LintStageError(
                stage=STAGE_DISCOVER,
                detail=str(exc),
                hint="Pass an existing directory via `--reports-dir` or `reports_dir`.",
            ) from exc

        results: list[FileLintResult] = []
        total = self.empty_counters
        for path in paths:
            result = self.lint_file(path)
            total = total + result.counters
            if result.records:
                results.append(result)

        self.logger.log_run_complete(len(paths), total.files_changed)
        return LintRunSummary(
            command=self.linter.command_name,
            apply_changes=self.config.apply_changes,
            files_scanned=len(paths),
            results=tuple(results),
            counters=total,
        )

    def lint_file(self, path: Path) -> FileLintResult:
        """Lint one document and persist it when apply mode allows."""

        display_path = self.store.display_path(path)
        try:
            original = self.store.load_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.log_stage_failure(STAGE_READ, type(exc).__name__)
            raise LintStageError(
                stage=STAGE_READ,
                detail=f"Failed to read `{display_path}`: {exc}",
                hint="Verify the file is readable UTF-8 text.",
            ) from exc

        report = self.linter.lint(original)
        counters = report.counters
        written = False
        if self.config.apply_changes and report.text != original:
            try:
                self.store.save_text(path, report.text)
            except OSError as exc:
                self.logger.log_stage_failure(STAGE_WRITE, type(exc).__name__)
                raise LintStageError(
                    stage=STAGE_WRITE,
                    detail=f"Failed to write `{display_path}`: {exc}",
                    hint=(
                        "Check file permissions and rerun; "
                        "files saved earlier in this run keep their fixes."
                    ),
                ) from exc
            counters = counters.with_file_changed()
            written = True
            self.logger.log_file_written(display_path)

        return FileLintResult(
            path=path,
            display_path=display_path,
            records=report.records,
            counters=counters,
            written=written,
        )


def create_citation_run(config: LintConfig, logger: RunLogger | None = None) -> LintRun:
    """Build a citation lint run for the given configuration."""

    return LintRun(
        linter=CitationNormalizer(display_width=config.display_width),
        config=config,
        empty_counters=CitationCounters(),
        logger=logger,
    )


def create_heading_run(config: LintConfig, logger: RunLogger | None = None) -> LintRun:
    """Build a heading lint run for the given configuration."""

    return LintRun(
        linter=HeadingLinter(),
        config=config,
        empty_counters=HeadingCounters(),
        logger=logger,
    )
