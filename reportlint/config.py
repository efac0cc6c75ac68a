"""Configuration model and loaders for reportlint.

Responsibilities:
- Define lint run configuration as a typed dataclass.
- Provide loader entry points for YAML- and environment-based configuration.

Key types:
- `LintConfig`: normalized settings for one lint command invocation.
- `ConfigLoader`: static construction helpers for `LintConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import (
    normalize_optional_string,
    parse_extension_list,
    parse_permissive_boolean,
)


_DEFAULT_REPORTS_DIR = Path("reports")
_DEFAULT_EXTENSIONS = (".qmd",)
_DEFAULT_DISPLAY_WIDTH = 60
_MIN_DISPLAY_WIDTH = 4


@dataclass(frozen=True, slots=True)
class LintConfig:
    """Settings for one lint command invocation.

    Attributes:
        reports_dir: Root directory scanned for report documents.
        extensions: File extensions (lowercase, dotted) treated as documents.
        apply_changes: Whether fixes are written back to disk.
        display_width: Maximum characters shown for flagged matches.
    """

    reports_dir: Path = _DEFAULT_REPORTS_DIR
    extensions: tuple[str, ...] = _DEFAULT_EXTENSIONS
    apply_changes: bool = False
    display_width: int = _DEFAULT_DISPLAY_WIDTH

    def validate(self) -> None:
        """Validate configuration values before a run."""

        if not self.extensions:
            raise ValueError("`extensions` must list at least one file extension.")
        if self.display_width < _MIN_DISPLAY_WIDTH:
            raise ValueError(
                f"`display_width` must be an integer of at least {_MIN_DISPLAY_WIDTH}."
            )

    def with_overrides(
        self,
        reports_dir: Path | None = None,
        apply_changes: bool = False,
    ) -> LintConfig:
        """Return a copy with explicit CLI overrides applied.

        The fix switch can only turn apply mode on; it never disables a
        config file that already enables it.
        """

        return replace(
            self,
            reports_dir=reports_dir if reports_dir is not None else self.reports_dir,
            apply_changes=self.apply_changes or apply_changes,
        )


class ConfigLoader:
    """Factory methods for creating `LintConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {"reports_dir", "extensions", "apply_changes", "display_width"}
    )

    @staticmethod
    def from_yaml(path: Path) -> LintConfig:
        """Create a validated config from a YAML file."""

        payload = ConfigLoader._parse_yaml_payload(path.read_text(encoding="utf-8"), path)
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> LintConfig:
        """Create a validated config from `REPORTLINT_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        payload: dict[str, Any] = {}
        for key in ConfigLoader._SUPPORTED_YAML_KEYS:
            env_key = f"REPORTLINT_{key.upper()}"
            if key == "apply_changes":
                env_key = "REPORTLINT_APPLY"
            value = normalize_optional_string(env_map.get(env_key))
            if value is not None:
                payload[key] = value
        return ConfigLoader._build_config_from_mapping(payload, source_label="Environment")

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` is not valid YAML: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> LintConfig:
        """Build a validated config from a normalized mapping payload."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        reports_dir = normalize_optional_string(payload.get("reports_dir"))
        extensions = (
            parse_extension_list(payload["extensions"])
            if "extensions" in payload
            else _DEFAULT_EXTENSIONS
        )
        apply_changes = ConfigLoader._optional_boolean(
            payload, "apply_changes", source_label, default=False
        )
        display_width = ConfigLoader._optional_positive_int(
            payload, "display_width", source_label, default=_DEFAULT_DISPLAY_WIDTH
        )

        config = LintConfig(
            reports_dir=Path(reports_dir) if reports_dir is not None else _DEFAULT_REPORTS_DIR,
            extensions=extensions,
            apply_changes=apply_changes,
            display_width=display_width,
        )
        config.validate()
        return config

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read and validate a boolean field from a payload."""

        if key not in payload:
            return default

        parsed = parse_permissive_boolean(payload[key])
        if parsed is None:
            raise ValueError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed

    @staticmethod
    def _optional_positive_int(
        payload: Mapping[str, Any], key: str, source_label: str, default: int
    ) -> int:
        """Read and validate a positive integer payload field."""

        if key not in payload:
            return default

        raw_value = payload[key]
        if isinstance(raw_value, bool):
            raise ValueError(f"{source_label} field `{key}` must be a positive integer.")
        if isinstance(raw_value, int):
            parsed = raw_value
        else:
            normalized = normalize_optional_string(raw_value)
            if normalized is None:
                return default
            try:
                parsed = int(normalized)
            except ValueError as exc:
                raise ValueError(
                    f"{source_label} field `{key}` must be a positive integer."
                ) from exc

        if parsed <= 0:
            raise ValueError(f"{source_label} field `{key}` must be a positive integer.")
        return parsed
