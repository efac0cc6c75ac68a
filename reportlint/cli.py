"""Command-line interface for reportlint.

Responsibilities:
- Expose the `citations`, `headings`, and `attributes` lint commands.
- Resolve effective `LintConfig` from YAML defaults and explicit CLI overrides.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Annotated

import typer

from .cli_rendering import (
    echo_attribute_findings,
    echo_attribute_legend,
    echo_citation_results,
    echo_citation_summary,
    echo_heading_results,
    echo_heading_summary,
    echo_mode_banner,
    exit_with_command_error,
)
from .config import ConfigLoader, LintConfig
from .errors import STAGE_AUDIT, STAGE_CONFIG, LintStageError
from .runner import create_citation_run, create_heading_run
from .telemetry.logger import RunLogger
from .text.attributes import audit_attribute_log

app = typer.Typer(
    name="reportlint",
    no_args_is_help=True,
    help="Audit and fix citation, heading, and attribute markup in report documents.",
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML config file with command defaults."),
]
ReportsDirOption = Annotated[
    Path | None,
    typer.Option(
        "--reports-dir",
        help="Directory scanned for report documents (overrides config file value).",
    ),
]
FixOption = Annotated[
    bool,
    typer.Option(
        "--fix",
        "--execute",
        "-e",
        help="Write fixes back to the documents instead of previewing them.",
    ),
]


def _load_yaml_config(config_path: Path | None) -> LintConfig | None:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise LintStageError(
            stage=STAGE_CONFIG,
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise LintStageError(
            stage=STAGE_CONFIG,
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except OSError as exc:
        raise LintStageError(
            stage=STAGE_CONFIG,
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify file permissions.",
        ) from exc


def _resolve_config(
    config_file: Path | None,
    reports_dir: Path | None,
    fix: bool,
) -> LintConfig:
    """Resolve effective config: CLI flag > YAML file > defaults."""

    base_config = _load_yaml_config(config_file) or LintConfig()
    return base_config.with_overrides(reports_dir=reports_dir, apply_changes=fix)


@app.command("citations")
def citations_command(
    fix: FixOption = False,
    reports_dir: ReportsDirOption = None,
    config_file: ConfigOption = None,
) -> None:
    """Unescape, merge, and audit citations in report documents."""

    try:
        config = _resolve_config(config_file, reports_dir, fix)
        echo_mode_banner(config.apply_changes, "files")
        summary = create_citation_run(config, logger=RunLogger("citations")).run()
    except Exception as exc:
        exit_with_command_error("citations", exc)

    echo_citation_results(summary.results)
    echo_citation_summary(summary)


@app.command("headings")
def headings_command(
    fix: FixOption = False,
    reports_dir: ReportsDirOption = None,
    config_file: ConfigOption = None,
) -> None:
    """Remove bold markers and hardcoded section numbers from headings."""

    try:
        config = _resolve_config(config_file, reports_dir, fix)
        echo_mode_banner(config.apply_changes, "headings")
        summary = create_heading_run(config, logger=RunLogger("headings")).run()
    except Exception as exc:
        exit_with_command_error("headings", exc)

    echo_heading_results(summary.results)
    echo_heading_summary(summary)


@app.command("attributes")
def attributes_command(
    log_files: Annotated[
        list[Path],
        typer.Argument(
            help=(
                "Attribute audit filter logs (`tag|type|attrs|content` lines). "
                "Use `-` to read from stdin."
            ),
        ),
    ],
) -> None:
    """Classify div/span/image attributes from captured audit filter logs."""

    logger = RunLogger("attributes")
    sources: list[tuple[str, list[str]]] = []
    try:
        for log_file in log_files:
            if str(log_file) == "-":
                sources.append(("<stdin>", sys.stdin.read().splitlines()))
                continue
            try:
                text = log_file.read_text(encoding="utf-8")
            except OSError as exc:
                logger.log_stage_failure(STAGE_AUDIT, type(exc).__name__)
                raise LintStageError(
                    stage=STAGE_AUDIT,
                    detail=f"Failed to read audit log `{log_file}`: {exc}",
                    hint="Capture the filter stderr to a file and pass its path.",
                ) from exc
            sources.append((log_file.as_posix(), text.splitlines()))
    except Exception as exc:
        exit_with_command_error("attributes", exc)

    echo_attribute_legend()
    total = 0
    for label, lines in sources:
        findings = audit_attribute_log(lines)
        total += len(findings)
        echo_attribute_findings(label, findings)
    if total == 0:
        typer.echo("No attributes found.")


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
