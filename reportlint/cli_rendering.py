"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for mode banners,
per-file change listings, attribute audit buckets, and run summaries.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import LintStageError
from .models.datatypes import (
    CHANGE_FOOTNOTE_ADJACENCY,
    CHANGE_MERGE,
    CHANGE_REMOVE_BOLD,
    CHANGE_REMOVE_NUMBER,
    CHANGE_UNESCAPE_FIX,
    AttributeFinding,
    ChangeRecord,
    FileLintResult,
    LintRunSummary,
)
from .text.attributes import (
    CATEGORY_ALT_FAIL,
    CATEGORY_MARK,
    CATEGORY_REF,
    CATEGORY_STYLE,
    bucket_findings,
)

_RULE = "-" * 60

_CHANGE_LABELS = {
    CHANGE_UNESCAPE_FIX: ("Fix Escape", typer.colors.GREEN),
    CHANGE_MERGE: ("Merge", typer.colors.CYAN),
    CHANGE_FOOTNOTE_ADJACENCY: ("Manual", typer.colors.YELLOW),
    CHANGE_REMOVE_BOLD: ("Remove Bold", typer.colors.CYAN),
    CHANGE_REMOVE_NUMBER: ("Remove Number", typer.colors.CYAN),
}

_CATEGORY_COLORS = {
    CATEGORY_ALT_FAIL: typer.colors.RED,
    CATEGORY_MARK: typer.colors.RED,
    CATEGORY_STYLE: typer.colors.YELLOW,
    CATEGORY_REF: typer.colors.BLUE,
}


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, LintStageError):
        typer.secho(exc.headline(command_name), fg=typer.colors.RED, err=True)
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_mode_banner(apply_changes: bool, subject: str) -> None:
    """Print the dry-run or fix-mode banner."""

    typer.echo(_RULE)
    if apply_changes:
        typer.secho(f"FIX MODE: Modifying {subject}...", fg=typer.colors.YELLOW)
    else:
        typer.echo("DRY RUN: Previewing changes (Use --fix to apply)...")
    typer.echo(_RULE)


def _change_tag(record: ChangeRecord) -> str:
    label, color = _CHANGE_LABELS.get(record.kind, (record.kind, typer.colors.WHITE))
    return typer.style(f"[{label}]", fg=color)


def format_citation_record(record: ChangeRecord) -> str:
    """Format one citation change record as a single indented line."""

    tag = _change_tag(record)
    prefix = f"   Line {record.line_number:<4} | {tag} "
    if record.is_flag:
        return f"{prefix}{record.original}"
    return f"{prefix}{record.original}  -->  {record.replacement}"


def format_heading_record(record: ChangeRecord) -> list[str]:
    """Format one heading change record as a Was/Now block."""

    return [
        f"   Line {record.line_number}: {_change_tag(record)}",
        f"     Was: {record.original}",
        f"     Now: {record.replacement}",
    ]


def _echo_file_header(display_path: str) -> None:
    typer.secho(f"📄 {display_path}", bold=True)


def echo_citation_results(results: tuple[FileLintResult, ...]) -> None:
    """Print buffered citation records file by file."""

    for result in results:
        lines = [format_citation_record(record) for record in result.records]
        _echo_file_header(result.display_path)
        typer.echo("\n".join(lines))
        if result.written:
            typer.secho("   Saved.", fg=typer.colors.GREEN)
        typer.echo("")


def echo_heading_results(results: tuple[FileLintResult, ...]) -> None:
    """Print buffered heading records file by file."""

    for result in results:
        lines: list[str] = []
        for record in result.records:
            lines.extend(format_heading_record(record))
        _echo_file_header(result.display_path)
        typer.echo("\n".join(lines))
        if result.written:
            typer.secho("   Saved.", fg=typer.colors.GREEN)
        typer.echo("")


def _echo_fix_hint(summary: LintRunSummary) -> None:
    if summary.apply_changes:
        typer.echo(f"   Files Modified:    {summary.counters.files_changed}")
    elif summary.counters.fixable > 0:
        typer.echo("")
        typer.echo("   Run with " + typer.style("--fix", bold=True) + " to apply changes.")


def echo_citation_summary(summary: LintRunSummary) -> None:
    """Print citation run totals."""

    counters = summary.counters
    typer.echo(_RULE)
    typer.echo("Summary:")
    typer.echo(f"   Files Scanned:     {summary.files_scanned}")
    typer.echo(f"   Escapes Fixed:     {counters.escapes_fixed}")
    typer.echo(f"   Merges Proposed:   {counters.citations_merged}")
    typer.echo(f"   Manual Flags:      {counters.manual_flags}")
    _echo_fix_hint(summary)


def echo_heading_summary(summary: LintRunSummary) -> None:
    """Print heading run totals."""

    counters = summary.counters
    typer.echo(_RULE)
    typer.echo("Summary:")
    typer.echo(f"   Files Scanned:     {summary.files_scanned}")
    typer.echo(f"   Bold Removed:      {counters.bold_removed}")
    typer.echo(f"   Numbers Removed:   {counters.numbers_removed}")
    _echo_fix_hint(summary)


def echo_attribute_legend() -> None:
    """Print the attribute audit category legend."""

    typer.echo("Legend:")
    typer.secho(" Highlights/Broken/No-Alt", fg=typer.colors.RED)
    typer.secho(" Styling", fg=typer.colors.YELLOW)
    typer.secho(" References", fg=typer.colors.BLUE)
    typer.echo(" Structure")
    typer.echo("")


def format_attribute_finding(finding: AttributeFinding) -> str:
    """Format one attribute finding with its category color."""

    color = _CATEGORY_COLORS.get(finding.category)
    marker = typer.style("*", fg=color) if color else "-"
    content = typer.style(f'"{finding.content}"', dim=True)
    return f"   {marker} [{finding.element_type}] {finding.attrs} {content}"


def echo_attribute_findings(label: str, findings: list[AttributeFinding]) -> None:
    """Print one source's findings grouped into ordered buckets."""

    buckets = bucket_findings(findings)
    if not buckets:
        return
    _echo_file_header(label)
    for title, items in buckets:
        typer.secho(f"   {title}", underline=True)
        for finding in items:
            typer.echo(format_attribute_finding(finding))
    typer.echo("")
