from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from lintsarif import __version__

_LEVEL_ICON = {"error": "✖", "warning": "⚠"}
_LEVEL_STYLE = {"error": "bold red", "warning": "yellow"}


def render_terminal(log: Mapping[str, Any], *, console: Console, show_details: bool = True) -> None:
    run = log["runs"][0]
    driver = run["tool"]["driver"]
    artifacts = run.get("artifacts", [])
    results = run.get("results", [])
    invocations = run.get("invocations", [])
    notifications = [n for inv in invocations for n in inv.get("toolConfigurationNotifications", [])]
    successful = all(inv.get("executionSuccessful", True) for inv in invocations)

    header = Text()
    header.append("lintsarif ", style="bold")
    header.append(f"v{__version__}", style="dim")
    header.append(f" · {driver.get('fullName', driver['name'])}", style="dim")
    console.print(Panel(header, subtitle=f"{len(artifacts)} artifact(s)", border_style="cyan"))

    if show_details:
        by_uri: dict[str, list[dict[str, Any]]] = defaultdict(list)
        for entry in [*notifications, *results]:
            by_uri[_uri(entry)].append(entry)

        for uri in sorted(by_uri):
            console.print(Text(uri, style="bold"))
            for entry in by_uri[uri]:
                _print_entry(console, entry)
            console.print()

    suppressed = sum(1 for r in results if r.get("suppressions"))
    console.print(Text("─" * 60, style="dim"))
    console.print(
        Text(
            f"Results: {len(results)} ({suppressed} suppressed)  Rules: {len(driver.get('rules', []))}  "
            f"Notifications: {len(notifications)}",
            style="bold",
        )
    )
    if successful:
        console.print(Text("Execution successful", style="green"))
    else:
        console.print(Text("Execution failed", style="bold red"))
    console.print(Text("─" * 60, style="dim"))


def _print_entry(console: Console, entry: Mapping[str, Any]) -> None:
    level = entry.get("level", "warning")
    label = entry.get("ruleId") or entry.get("descriptor", {}).get("id", "?")

    line = Text()
    line.append(f"  {_LEVEL_ICON.get(level, '•')} ", style=_LEVEL_STYLE.get(level, ""))
    line.append(label, style="bold")
    loc = _position(entry)
    if loc:
        line.append(f"  ({loc})", style="dim")
    line.append(f"  {entry['message']['text']}")
    if entry.get("suppressions"):
        line.append("  [suppressed]", style="dim")
    console.print(line)


def _uri(entry: Mapping[str, Any]) -> str:
    return entry["locations"][0]["physicalLocation"]["artifactLocation"]["uri"]


def _position(entry: Mapping[str, Any]) -> str:
    region = entry["locations"][0]["physicalLocation"].get("region", {})
    if "startLine" not in region:
        return ""
    loc = str(region["startLine"])
    if "startColumn" in region:
        loc += f":{region['startColumn']}"
    return loc
