from __future__ import annotations

from lintsarif.engine.types import SEVERITY_ERROR, LintMessage, LintResult, SuppressionRecord


def msg(
    text: str = "msg",
    *,
    rule_id: str | None = "no-undef",
    severity: int = SEVERITY_ERROR,
    line: int | None = 1,
    column: int | None = 1,
    **kwargs,
) -> LintMessage:
    return LintMessage(message=text, severity=severity, rule_id=rule_id, line=line, column=column, **kwargs)


def suppressed(text: str = "suppressed", *, kind: str = "directive", justification: str | None = "legacy", **kwargs) -> LintMessage:
    record = SuppressionRecord(kind=kind, justification=justification)
    return msg(text, suppressions=(record,), **kwargs)


def lint_result(file_path: str, *messages: LintMessage, suppressed_messages: tuple[LintMessage, ...] = ()) -> LintResult:
    return LintResult(file_path=file_path, messages=tuple(messages), suppressed_messages=suppressed_messages)
