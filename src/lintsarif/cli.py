from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from lintsarif import __version__
from lintsarif.config import ConfigError, LintSarifConfig, load_config
from lintsarif.logging_utils import configure_logging
from lintsarif.reporters.eslint_json import EslintReport, ReportError, parse_eslint_report
from lintsarif.reporters.sarif import build_sarif, render_sarif
from lintsarif.reporters.terminal import render_terminal

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="lintsarif: convert ESLint results into SARIF 2.1.0.",
)
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def _main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose logs (printed to stderr)."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Reduce non-essential output."),
    ] = False,
) -> None:
    """lintsarif CLI."""

    if verbose and quiet:
        raise typer.BadParameter("Choose at most one: --verbose or --quiet.")
    configure_logging(verbose=verbose, quiet=quiet)
    ctx.obj = {"verbose": verbose, "quiet": quiet}


def _cli_settings(ctx: typer.Context) -> dict[str, bool]:
    if not isinstance(ctx.obj, dict):
        return {"verbose": False, "quiet": False}
    return {"verbose": bool(ctx.obj.get("verbose", False)), "quiet": bool(ctx.obj.get("quiet", False))}


def _load_config_or_exit(project_root: Path) -> LintSarifConfig:
    try:
        return load_config(project_root)
    except ConfigError as exc:
        err_console.print(f"Invalid configuration: {exc}")
        raise typer.Exit(code=2) from exc


def _read_report_or_exit(input_json: str) -> EslintReport:
    try:
        if input_json.strip() == "-":
            raw = sys.stdin.read()
        else:
            raw = Path(input_json).read_text(encoding="utf-8", errors="replace")
        return parse_eslint_report(raw)
    except (OSError, ReportError) as exc:
        err_console.print(f"Invalid ESLint report: {exc}")
        raise typer.Exit(code=2) from exc


def _build_log(
    report: EslintReport,
    *,
    config: LintSarifConfig,
    project_root: Path,
    base_folder: Path | None,
) -> dict[str, Any]:
    if base_folder is not None:
        base = base_folder
    elif config.base_folder is not None:
        base = project_root / config.base_folder
    else:
        base = project_root

    options = config.sarif_options(base_folder_path=base.as_posix())
    return build_sarif(report.results, rule_meta_by_id=report.rules_meta, options=options)


def _input_arg() -> Any:
    return typer.Argument(help="ESLint JSON report path (`json` or `json-with-metadata`), or '-' for stdin.")


def _project_root_opt() -> Any:
    return typer.Option(
        "--project-root",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Directory holding pyproject.toml; also the default base folder (default: current directory).",
    )


def _base_folder_opt() -> Any:
    return typer.Option(
        "--base-folder",
        resolve_path=True,
        help="Artifact URIs are written relative to this folder (default: config base-folder or project root).",
    )


@app.command()
def convert(
    input_json: Annotated[str, _input_arg()],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write SARIF to this path instead of stdout."),
    ] = None,
    project_root: Annotated[Path, _project_root_opt()] = Path("."),
    base_folder: Annotated[Path | None, _base_folder_opt()] = None,
    ignore_suppressed: Annotated[
        bool,
        typer.Option("--ignore-suppressed", help="Drop suppressed messages entirely."),
    ] = False,
    include_suppressed: Annotated[
        bool,
        typer.Option("--include-suppressed", help="Include suppressed messages with suppression metadata."),
    ] = False,
    tool_name: Annotated[
        str | None,
        typer.Option("--tool-name", help="Tool driver name (default: ESLint)."),
    ] = None,
    tool_version: Annotated[
        str | None,
        typer.Option("--tool-version", help="Tool version recorded in the SARIF driver block."),
    ] = None,
    no_fingerprints: Annotated[
        bool,
        typer.Option("--no-fingerprints", help="Omit partial fingerprints."),
    ] = False,
    fail_on_error: Annotated[
        bool,
        typer.Option("--fail-on-error", help="Exit 1 when a tool-level error marks the run unsuccessful."),
    ] = False,
) -> None:
    """
    Convert an ESLint JSON report into a SARIF 2.1.0 log.
    """

    if ignore_suppressed and include_suppressed:
        raise typer.BadParameter("Choose at most one: --ignore-suppressed or --include-suppressed.")

    config = _load_config_or_exit(project_root)
    overrides: dict[str, Any] = {}
    if ignore_suppressed or include_suppressed:
        overrides["ignore_suppressed"] = ignore_suppressed
    if tool_name:
        overrides["tool_name"] = tool_name
    if tool_version:
        overrides["tool_version"] = tool_version
    if no_fingerprints:
        overrides["fingerprints"] = False
    if overrides:
        config = replace(config, **overrides)

    report = _read_report_or_exit(input_json)
    log = _build_log(report, config=config, project_root=project_root, base_folder=base_folder)
    text = render_sarif(log)

    dest = output
    if dest is None and config.output is not None:
        dest = project_root / config.output

    if dest is None:
        typer.echo(text)
    else:
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(text + "\n", encoding="utf-8")
        except OSError as exc:
            err_console.print(f"Failed to write SARIF report: {exc}")
            raise typer.Exit(code=2) from exc
        run = log["runs"][0]
        logger.info("wrote %d result(s) for %d artifact(s) to %s", len(run["results"]), len(run.get("artifacts", [])), dest)

    if fail_on_error and not _execution_successful(log):
        raise typer.Exit(code=1)


@app.command()
def summary(
    ctx: typer.Context,
    input_json: Annotated[str, _input_arg()],
    project_root: Annotated[Path, _project_root_opt()] = Path("."),
    base_folder: Annotated[Path | None, _base_folder_opt()] = None,
) -> None:
    """
    Print a terminal summary of the SARIF log an ESLint report would produce.
    """

    config = _load_config_or_exit(project_root)
    report = _read_report_or_exit(input_json)
    log = _build_log(report, config=config, project_root=project_root, base_folder=base_folder)

    settings = _cli_settings(ctx)
    render_terminal(log, console=console, show_details=not settings["quiet"])


def _execution_successful(log: dict[str, Any]) -> bool:
    invocations = log["runs"][0].get("invocations", [])
    return all(inv["executionSuccessful"] for inv in invocations)
