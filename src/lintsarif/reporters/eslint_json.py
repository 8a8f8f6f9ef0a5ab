from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from lintsarif.engine.types import (
    SEVERITY_WARN,
    LintMessage,
    LintResult,
    RuleDocs,
    RuleMeta,
    SuppressionRecord,
)

logger = logging.getLogger(__name__)


class ReportError(ValueError):
    """Raised when an ESLint JSON report is invalid or cannot be processed."""


@dataclass(frozen=True, slots=True)
class EslintReport:
    results: tuple[LintResult, ...]
    rules_meta: Mapping[str, RuleMeta | None] = field(default_factory=lambda: MappingProxyType({}))


def parse_eslint_report(text: str) -> EslintReport:
    """
    Parse the output of ESLint's `json` or `json-with-metadata` formatter.

    `json` emits a bare array of per-file results. `json-with-metadata`
    wraps that array as `{"results": [...], "metadata": {"rulesMeta": {...}}}`;
    only the second shape carries rule documentation.

    Entries that are not objects, or file results without a path, are skipped.
    """

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ReportError(f"Invalid JSON: {exc}") from exc

    rules_meta: dict[str, RuleMeta | None] = {}
    if isinstance(data, list):
        raw_results: Any = data
    elif isinstance(data, dict):
        raw_results = data.get("results")
        if not isinstance(raw_results, list):
            raise ReportError("ESLint report `results` must be a list.")
        metadata = data.get("metadata")
        if isinstance(metadata, dict):
            rules_meta = _parse_rules_meta(metadata.get("rulesMeta"))
    else:
        raise ReportError("ESLint report must be a JSON array or object.")

    results: list[LintResult] = []
    for item in raw_results:
        if not isinstance(item, dict):
            continue
        result = _parse_result(item)
        if result is not None:
            results.append(result)

    logger.debug("parsed %d file result(s), %d rule meta entr(ies)", len(results), len(rules_meta))
    return EslintReport(results=tuple(results), rules_meta=MappingProxyType(rules_meta))


def _parse_result(item: dict[str, Any]) -> LintResult | None:
    file_path = item.get("filePath")
    if not isinstance(file_path, str) or not file_path:
        logger.debug("skipping file result without filePath")
        return None

    return LintResult(
        file_path=file_path,
        messages=_parse_messages(item.get("messages")),
        suppressed_messages=_parse_messages(item.get("suppressedMessages")),
    )


def _parse_messages(value: Any) -> tuple[LintMessage, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(_parse_message(item) for item in value if isinstance(item, dict))


def _parse_message(item: dict[str, Any]) -> LintMessage:
    rule_id = item.get("ruleId")
    if not isinstance(rule_id, str) or not rule_id:
        rule_id = None

    severity = item.get("severity")
    if not isinstance(severity, int) or isinstance(severity, bool):
        severity = SEVERITY_WARN

    source = item.get("source")
    if not isinstance(source, str):
        source = None

    suppressions: tuple[SuppressionRecord, ...] | None = None
    raw_suppressions = item.get("suppressions")
    if isinstance(raw_suppressions, list):
        suppressions = tuple(_parse_suppression(s) for s in raw_suppressions if isinstance(s, dict))

    return LintMessage(
        message=str(item.get("message", "")),
        severity=severity,
        fatal=item.get("fatal") is True,
        rule_id=rule_id,
        line=_position(item.get("line")),
        column=_position(item.get("column")),
        end_line=_position(item.get("endLine")),
        end_column=_position(item.get("endColumn")),
        source=source,
        suppressions=suppressions,
    )


def _parse_suppression(item: dict[str, Any]) -> SuppressionRecord:
    justification = item.get("justification")
    return SuppressionRecord(
        kind=str(item.get("kind", "")),
        justification=justification if isinstance(justification, str) else None,
    )


def _parse_rules_meta(value: Any) -> dict[str, RuleMeta | None]:
    if not isinstance(value, dict):
        return {}

    out: dict[str, RuleMeta | None] = {}
    for rule_id, raw in value.items():
        if not isinstance(rule_id, str):
            continue
        if not isinstance(raw, dict):
            out[rule_id] = None
            continue

        docs = None
        raw_docs = raw.get("docs")
        if isinstance(raw_docs, dict):
            docs = RuleDocs(
                description=_optional_str(raw_docs.get("description")),
                url=_optional_str(raw_docs.get("url")),
                category=_optional_str(raw_docs.get("category")),
            )
        out[rule_id] = RuleMeta(docs=docs, type=_optional_str(raw.get("type")))
    return out


def _position(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None
