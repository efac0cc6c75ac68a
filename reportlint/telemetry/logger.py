"""Structured run logging utilities.

Responsibilities:
- Emit concise, deterministic event lines for lint command activity.
- Route events through `loguru` to stderr so report output stays on stdout.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class RunLogger:
    """Emit deterministic lint events for one command invocation."""

    def __init__(self, command: str, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Configure the loguru sink for this invocation."""

        self._command = command
        _loguru_logger.remove()
        _loguru_logger.add(
            sink or sys.stderr,
            format="{message}",
            level=level,
            colorize=False,
        )

    def _emit(self, level: str, event: str, **context: object) -> None:
        """Emit one structured event line."""

        line = f"[lint] level={level} command={self._command} event={event}{_format_context(context)}"
        _loguru_logger.log(level, line)

    def log_run_start(self, reports_dir: object, apply_changes: bool) -> None:
        """Emit a run-start event with mode and corpus root."""

        self._emit(
            "INFO",
            "start",
            mode="fix" if apply_changes else "dry_run",
            reports_dir=reports_dir,
        )

    def log_file_written(self, path: object) -> None:
        """Emit an event for one document written back to disk."""

        self._emit("INFO", "write", path=path)

    def log_run_complete(self, files_scanned: int, files_changed: int) -> None:
        """Emit a run-complete event with file totals."""

        self._emit(
            "INFO",
            "complete",
            files_scanned=files_scanned,
            files_changed=files_changed,
        )

    def log_stage_failure(self, stage: str, error_type: str) -> None:
        """Emit a stage-failure event without document payload details."""

        self._emit("ERROR", "failure", stage=stage, error_type=error_type)
