"""Stage-scoped lint failures and their CLI wording.

Stages name the step of a lint command that failed: loading the YAML config,
discovering documents, reading or writing one document, or reading an
attribute audit log.
"""

from __future__ import annotations

STAGE_CONFIG = "config"
STAGE_DISCOVER = "discover"
STAGE_READ = "read"
STAGE_WRITE = "write"
STAGE_AUDIT = "audit"

LINT_STAGES = (STAGE_CONFIG, STAGE_DISCOVER, STAGE_READ, STAGE_WRITE, STAGE_AUDIT)


class LintStageError(RuntimeError):
    """A lint command failed at one of `LINT_STAGES`; `hint` suggests a remedy."""

    def __init__(self, *, stage: str, detail: str, hint: str | None = None) -> None:
        if stage not in LINT_STAGES:
            raise ValueError(f"Unknown lint stage `{stage}`.")
        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint

    def headline(self, command_name: str) -> str:
        """Return the one-line failure message printed for `command_name`."""

        return f"{command_name} failed at stage `{self.stage}`: {self.detail}"
