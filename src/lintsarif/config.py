from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lintsarif.engine.types import SarifOptions


class ConfigError(ValueError):
    """Raised when a lintsarif configuration table is invalid."""


DEFAULT_TOOL_NAME = "ESLint"
DEFAULT_INFORMATION_URI = "https://eslint.org"


@dataclass(frozen=True, slots=True)
class LintSarifConfig:
    ignore_suppressed: bool = False
    tool_name: str = DEFAULT_TOOL_NAME
    tool_version: str | None = None
    information_uri: str = DEFAULT_INFORMATION_URI
    base_folder: str | None = None
    fingerprints: bool = True
    index_rules: bool = True
    output: str | None = None

    def sarif_options(self, *, base_folder_path: str) -> SarifOptions:
        return SarifOptions(
            ignore_suppressed=self.ignore_suppressed,
            tool_version=self.tool_version,
            base_folder_path=base_folder_path,
            tool_name=self.tool_name,
            information_uri=self.information_uri,
            fingerprints=self.fingerprints,
            index_rules=self.index_rules,
        )


def load_config(project_dir: Path | str = ".") -> LintSarifConfig:
    """
    Load lintsarif configuration from `pyproject.toml` within `project_dir`.

    If no file / no `[tool.lintsarif]` table exists, returns defaults.
    """

    pyproject_path = Path(project_dir) / "pyproject.toml"
    if not pyproject_path.exists():
        return LintSarifConfig()

    try:
        data = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {exc}") from exc

    tool_table = data.get("tool", {})
    if not isinstance(tool_table, dict):
        return LintSarifConfig()

    table = tool_table.get("lintsarif", {})
    if not isinstance(table, dict) or not table:
        return LintSarifConfig()

    return _parse_lintsarif_table(table)


def _parse_lintsarif_table(table: dict[str, Any]) -> LintSarifConfig:
    return LintSarifConfig(
        ignore_suppressed=_bool(table, "ignore-suppressed", default=False),
        tool_name=_str(table, "tool-name") or DEFAULT_TOOL_NAME,
        tool_version=_str(table, "tool-version"),
        information_uri=_str(table, "information-uri") or DEFAULT_INFORMATION_URI,
        base_folder=_str(table, "base-folder"),
        fingerprints=_bool(table, "fingerprints", default=True),
        index_rules=_bool(table, "index-rules", default=True),
        output=_str(table, "output"),
    )


def _lookup(table: dict[str, Any], key: str) -> Any:
    # Accept both `kebab-case` and `snake_case` keys.
    return table.get(key, table.get(key.replace("-", "_")))


def _bool(table: dict[str, Any], key: str, *, default: bool) -> bool:
    value = _lookup(table, key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"`tool.lintsarif.{key}` must be a boolean.")
    return value


def _str(table: dict[str, Any], key: str) -> str | None:
    value = _lookup(table, key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"`tool.lintsarif.{key}` must be a string.")
    return value.strip() or None
