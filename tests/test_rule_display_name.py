from __future__ import annotations

import pytest

from lintsarif.reporters.sarif import rule_display_name


@pytest.mark.parametrize(
    ("rule_id", "expected"),
    [
        ("no-unused-vars", "NoUnusedVars"),
        ("semi", "Semi"),
        ("@typescript-eslint/no-explicit-any", "TypescriptEslintNoExplicitAny"),
        ("react-hooks/exhaustive-deps", "ReactHooksExhaustiveDeps"),
        ("import.no-cycle", "ImportNoCycle"),
        ("max len", "MaxLen"),
        ("ES2015", "Es2015"),
        ("", ""),
        ("---", ""),
    ],
)
def test_rule_display_name(rule_id: str, expected: str) -> None:
    assert rule_display_name(rule_id) == expected
