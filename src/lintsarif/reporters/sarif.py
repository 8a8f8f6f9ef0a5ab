from __future__ import annotations

import hashlib
import json
import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from lintsarif.engine.types import (
    SEVERITY_ERROR,
    LintMessage,
    LintResult,
    RuleMeta,
    SarifLevel,
    SarifOptions,
    SuppressionRecord,
)
from lintsarif.utils import relative_uri

SARIF_VERSION = "2.1.0"
SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"

# Descriptor for findings that carry no rule id (parse errors, crashed rules).
INTERNAL_ERROR_ID = "ESL0999"

NO_CATEGORY = "No category provided"
NO_CATEGORY_NAME = "NoCategoryProvided"
NO_CATEGORY_DESCRIPTION = "Please see details in message"

_NON_WORD_RE = re.compile(r"[^A-Za-z0-9 ]")

logger = logging.getLogger(__name__)


def rule_display_name(rule_id: str) -> str:
    """
    Derive a readable CamelCase label from a rule id.

    `no-unused-vars` -> `NoUnusedVars`,
    `@typescript-eslint/no-explicit-any` -> `TypescriptEslintNoExplicitAny`.
    """

    words = _NON_WORD_RE.sub(" ", rule_id).split()
    return "".join(word.capitalize() for word in words)


def fingerprint(value: str) -> str:
    # Stability matters here, collision resistance does not.
    return hashlib.md5(value.encode("utf-8"), usedforsecurity=False).hexdigest()


def sarif_level(message: LintMessage) -> SarifLevel:
    if message.fatal or message.severity == SEVERITY_ERROR:
        return "error"
    return "warning"


class SarifBuilder:
    """
    Convert per-file lint results into a single SARIF 2.1.0 log.

    A builder holds no state between calls: every `build()` starts from
    fresh artifact/rule tables, so one instance can format many runs.
    """

    def __init__(self, options: SarifOptions | None = None) -> None:
        self.options = options or SarifOptions()

    def build(
        self,
        results: Iterable[LintResult],
        rule_meta_by_id: Mapping[str, RuleMeta | None] | None = None,
    ) -> dict[str, Any]:
        return _Run(self.options, rule_meta_by_id or {}).build(results)


def build_sarif(
    results: Iterable[LintResult],
    *,
    rule_meta_by_id: Mapping[str, RuleMeta | None] | None = None,
    options: SarifOptions | None = None,
) -> dict[str, Any]:
    return SarifBuilder(options).build(results, rule_meta_by_id)


def render_sarif(log: Mapping[str, Any]) -> str:
    return json.dumps(log, indent=2, sort_keys=False)


class _Run:
    """Accumulators for a single `build()` call."""

    def __init__(self, options: SarifOptions, rule_meta_by_id: Mapping[str, RuleMeta | None]) -> None:
        self.options = options
        self.rule_meta_by_id = rule_meta_by_id
        self.artifacts: list[dict[str, Any]] = []
        self.artifact_index: dict[str, int] = {}
        self.rules: list[dict[str, Any]] = []
        self.rule_index: dict[str, int] = {}
        self.results: list[dict[str, Any]] = []
        self.notifications: list[dict[str, Any]] = []
        self.execution_successful = True

    def build(self, results: Iterable[LintResult]) -> dict[str, Any]:
        for result in results:
            self._add_file(result)

        logger.debug(
            "sarif: %d artifact(s), %d rule(s), %d result(s), %d notification(s)",
            len(self.artifacts),
            len(self.rules),
            len(self.results),
            len(self.notifications),
        )
        return self._assemble()

    def _add_file(self, result: LintResult) -> None:
        messages = list(result.messages)
        merge_suppressed = bool(result.suppressed_messages) and not self.options.ignore_suppressed
        if merge_suppressed:
            messages.extend(result.suppressed_messages)
        if not messages:
            return

        uri = relative_uri(result.file_path, self.options.base_folder_path)
        index = self._artifact(uri)
        for message in messages:
            self._add_message(message, uri=uri, artifact_index=index, merge_suppressed=merge_suppressed)

    def _artifact(self, uri: str) -> int:
        # Keyed on the normalized URI so aliases of one file share an entry.
        index = self.artifact_index.get(uri)
        if index is None:
            index = len(self.artifacts)
            self.artifact_index[uri] = index
            self.artifacts.append({"location": {"uri": uri}})
        return index

    def _add_message(self, message: LintMessage, *, uri: str, artifact_index: int, merge_suppressed: bool) -> None:
        level = sarif_level(message)
        physical_location: dict[str, Any] = {"artifactLocation": {"uri": uri, "index": artifact_index}}
        entry: dict[str, Any] = {
            "level": level,
            "message": {"text": message.message},
            "locations": [{"physicalLocation": physical_location}],
        }

        region = _region(message)
        if region is not None:
            physical_location["region"] = region

        fingerprints: dict[str, str] | None = None
        if self.options.fingerprints:
            fingerprints = {
                "messageHash/v1": fingerprint(message.message),
                "artifactUriHash/v1": fingerprint(uri),
            }
            entry["partialFingerprints"] = fingerprints

        if not message.rule_id:
            entry["descriptor"] = {"id": INTERNAL_ERROR_ID}
            if level == "error":
                self.execution_successful = False
            self.notifications.append(entry)
            return

        rule_id = message.rule_id
        entry["ruleId"] = rule_id
        if self.options.index_rules:
            index = self._rule(rule_id)
            if index is not None:
                entry["ruleIndex"] = index
        if fingerprints is not None:
            fingerprints["ruleIdHash/v1"] = fingerprint(rule_id)
        if merge_suppressed:
            entry["suppressions"] = [_suppression(s) for s in message.suppressions or ()]
        self.results.append(entry)

    def _rule(self, rule_id: str) -> int | None:
        index = self.rule_index.get(rule_id)
        if index is not None:
            return index

        meta = self.rule_meta_by_id.get(rule_id)
        if meta is None:
            logger.debug("sarif: no metadata for rule %s", rule_id)
            return None

        index = len(self.rules)
        self.rule_index[rule_id] = index
        self.rules.append(_rule_descriptor(rule_id, meta))
        return index

    def _assemble(self) -> dict[str, Any]:
        opts = self.options
        driver: dict[str, Any] = {"name": opts.tool_name}
        if opts.tool_version is not None:
            driver["fullName"] = f"{opts.tool_name} v{opts.tool_version}"
        driver["informationUri"] = opts.information_uri
        if opts.tool_version is not None:
            driver["version"] = opts.tool_version
        driver["rules"] = self.rules

        run: dict[str, Any] = {"tool": {"driver": driver}}
        if opts.tool_version is not None:
            run["automationDetails"] = {"id": f"{opts.tool_name}/{opts.tool_version}"}
        if self.artifacts:
            run["artifacts"] = self.artifacts
        run["results"] = self.results
        if self.notifications:
            run["invocations"] = [
                {
                    "toolConfigurationNotifications": self.notifications,
                    "executionSuccessful": self.execution_successful,
                }
            ]

        return {"version": SARIF_VERSION, "$schema": SARIF_SCHEMA, "runs": [run]}


def _rule_descriptor(rule_id: str, meta: RuleMeta) -> dict[str, Any]:
    docs = meta.docs
    if docs is None:
        return {
            "id": rule_id,
            "name": NO_CATEGORY_NAME,
            "shortDescription": {"text": NO_CATEGORY_DESCRIPTION},
            "properties": {"category": NO_CATEGORY},
        }

    rule: dict[str, Any] = {"id": rule_id, "name": rule_display_name(rule_id)}
    if docs.url:
        rule["helpUri"] = docs.url
    rule["shortDescription"] = {"text": docs.description or ""}
    rule["properties"] = {"category": docs.category or NO_CATEGORY}
    return rule


def _region(message: LintMessage) -> dict[str, Any] | None:
    # Positions may legitimately be 0, so test for presence rather than truthiness.
    region: dict[str, Any] | None = None
    if message.line is not None or message.column is not None:
        region = {}
        if message.line is not None:
            region["startLine"] = message.line
        if message.column is not None:
            region["startColumn"] = message.column
        if message.end_line is not None:
            region["endLine"] = message.end_line
        if message.end_column is not None:
            region["endColumn"] = message.end_column

    if message.source:
        if region is None:
            region = {}
        region["snippet"] = {"text": message.source}
    return region


def _suppression(record: SuppressionRecord) -> dict[str, str]:
    return {
        "kind": "inSource" if record.kind == "directive" else "external",
        "justification": record.justification or "",
    }
