from __future__ import annotations

import json
from pathlib import Path

import pytest

from lintsarif.engine.types import RuleDocs, RuleMeta, SarifOptions

BASE = "/repo"


@pytest.fixture()
def options() -> SarifOptions:
    return SarifOptions(base_folder_path=BASE)


@pytest.fixture()
def rules_meta() -> dict[str, RuleMeta | None]:
    return {
        "no-unused-vars": RuleMeta(docs=RuleDocs(description="disallow unused vars", url="https://x", category="Variables")),
        "no-undef": RuleMeta(docs=RuleDocs(description="disallow undeclared variables")),
        "semi": RuleMeta(docs=None),
        "ghost-rule": None,
    }


@pytest.fixture()
def eslint_report_file(tmp_path: Path) -> Path:
    root = tmp_path.resolve()
    payload = {
        "results": [
            {
                "filePath": str(root / "src" / "a.ts"),
                "messages": [
                    {
                        "ruleId": "no-unused-vars",
                        "severity": 2,
                        "message": "'x' is defined but never used.",
                        "line": 3,
                        "column": 5,
                    },
                ],
                "suppressedMessages": [
                    {
                        "ruleId": "no-console",
                        "severity": 1,
                        "message": "Unexpected console statement.",
                        "line": 7,
                        "column": 1,
                        "suppressions": [{"kind": "directive", "justification": "debug build"}],
                    },
                ],
            },
            {
                "filePath": str(root / "src" / "b.ts"),
                "messages": [
                    {"ruleId": None, "fatal": True, "severity": 2, "message": "Parsing error: Unexpected token", "line": 1, "column": 1},
                ],
                "suppressedMessages": [],
            },
        ],
        "metadata": {
            "rulesMeta": {
                "no-unused-vars": {
                    "type": "problem",
                    "docs": {"description": "disallow unused vars", "url": "https://eslint.org/docs/latest/rules/no-unused-vars"},
                },
            },
        },
    }
    path = tmp_path / "eslint.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path
