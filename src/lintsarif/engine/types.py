from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SarifLevel = Literal["error", "warning"]

# ESLint numeric severities.
SEVERITY_WARN = 1
SEVERITY_ERROR = 2


@dataclass(frozen=True, slots=True)
class SuppressionRecord:
    kind: str  # "directive" for inline comments, anything else is external
    justification: str | None = None


@dataclass(frozen=True, slots=True)
class LintMessage:
    message: str
    severity: int = SEVERITY_WARN
    fatal: bool = False
    rule_id: str | None = None
    line: int | None = None  # 1-based
    column: int | None = None  # 1-based
    end_line: int | None = None  # 1-based
    end_column: int | None = None  # 1-based
    source: str | None = None
    suppressions: tuple[SuppressionRecord, ...] | None = None


@dataclass(frozen=True, slots=True)
class LintResult:
    file_path: str
    messages: tuple[LintMessage, ...] = ()
    suppressed_messages: tuple[LintMessage, ...] = ()


@dataclass(frozen=True, slots=True)
class RuleDocs:
    description: str | None = None
    url: str | None = None
    category: str | None = None


@dataclass(frozen=True, slots=True)
class RuleMeta:
    docs: RuleDocs | None = None
    type: str | None = None  # "problem" | "suggestion" | "layout"


@dataclass(frozen=True, slots=True)
class SarifOptions:
    """
    Formatting options for `SarifBuilder`.

    `fingerprints` and `index_rules` select the enhanced output (partial
    fingerprints, a rules table and `ruleIndex` on results). Turning both off
    yields the plain result listing older consumers expect.
    """

    ignore_suppressed: bool = False
    tool_version: str | None = None
    base_folder_path: str = ""
    tool_name: str = "ESLint"
    information_uri: str = "https://eslint.org"
    fingerprints: bool = True
    index_rules: bool = True
