"""CLI error-handling tests for concise stage diagnostics."""

from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from reportlint.cli import app
from reportlint.errors import LintStageError


def test_citations_command_reports_missing_reports_dir(tmp_path: Path) -> None:
    """A missing reports directory should fail with stage-aware diagnostics."""

    runner = CliRunner()

    result = runner.invoke(
        app, ["citations", "--reports-dir", str(tmp_path / "missing-reports")]
    )

    assert result.exit_code == 1
    assert "citations failed at stage `discover`" in result.output
    assert "Hint: Pass an existing directory" in result.output


def test_headings_command_reports_missing_config_file() -> None:
    """A missing `--config` path should fail at the config stage."""

    runner = CliRunner()

    result = runner.invoke(app, ["headings", "--config", "missing-reportlint.yaml"])

    assert result.exit_code == 1
    assert "headings failed at stage `config`" in result.output
    assert "Config file not found: `missing-reportlint.yaml`." in result.output


def test_citations_command_reports_invalid_config_payload(tmp_path: Path) -> None:
    """Invalid YAML config values should fail fast with a config-stage error."""

    config_path = tmp_path / "invalid.yaml"
    config_path.write_text("apply_changes: sometimes\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["citations", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "citations failed at stage `config`" in result.output
    assert "`apply_changes` must be a boolean" in result.output


def test_citations_command_reports_write_stage_error(
    monkeypatch: MonkeyPatch, write_corpus
) -> None:
    """Write failures should surface as stage errors with exit code 1."""

    def _failing_run(*_: object, **__: object) -> None:
        """Raise a stage-specific error to simulate a persistence failure."""

        raise LintStageError(
            stage="write",
            detail="Failed to write `reports/a.qmd`: read-only file system",
            hint="Check file permissions and rerun.",
        )

    reports_dir = write_corpus({"a.qmd": "[@a][@b]"})
    monkeypatch.setattr("reportlint.runner.LintRun.run", _failing_run)
    runner = CliRunner()

    result = runner.invoke(app, ["citations", "--fix", "--reports-dir", str(reports_dir)])

    assert result.exit_code == 1
    assert "citations failed at stage `write`" in result.output
    assert "Hint: Check file permissions and rerun." in result.output


def test_attributes_command_reports_unreadable_log(tmp_path: Path) -> None:
    """A missing audit log should fail at the audit stage."""

    runner = CliRunner()

    result = runner.invoke(app, ["attributes", str(tmp_path / "absent.log")])

    assert result.exit_code == 1
    assert "attributes failed at stage `audit`" in result.output
