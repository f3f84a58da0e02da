# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_branch_verifier

import asyncio
import sys
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from coreason_branch_verifier.api.github import AsyncGitHubClient
from coreason_branch_verifier.config import Settings, get_settings
from coreason_branch_verifier.domain.results import RunSummary
from coreason_branch_verifier.events import (
    CompositeEmitter,
    EventCollector,
    EventEmitter,
    EventType,
    LoguruEmitter,
    VerificationEvent,
)
from coreason_branch_verifier.exceptions import ConfigurationError
from coreason_branch_verifier.harness.context import CheckContext
from coreason_branch_verifier.harness.runner import CheckRunner, Scenario
from coreason_branch_verifier.reporters.markdown import MarkdownReporter
from coreason_branch_verifier.scenarios import SCENARIOS, resolve_scenarios
from coreason_branch_verifier.ui.console import RichConsoleEmitter
from coreason_branch_verifier.utils.logger import configure_logging, logger

app = typer.Typer(
    name="branch-verifier",
    help="Coreason Branch Verifier: read-only GitHub branch and artifact assertions",
    add_completion=False,
)


async def run_scenarios(
    scenarios: List[Scenario],
    settings: Settings,
    artifacts_dir: Path,
    event_emitter: EventEmitter,
) -> RunSummary:
    """
    Runs each scenario with its own context; one HTTP client serves the whole run.
    """
    runner = CheckRunner(event_emitter=event_emitter)
    summary = RunSummary()
    async with AsyncGitHubClient(settings) as client:
        for scenario in scenarios:
            context = CheckContext(client, scenario.owner, scenario.repo, artifacts_dir)
            summary = summary.extend(await runner.run_scenario(scenario, context))
    return summary


@app.command(name="run")
def run(
    scenario_names: Optional[List[str]] = typer.Argument(
        None, metavar="[SCENARIO]...", help="Scenarios to run, in order. Defaults to all."
    ),
    artifacts_dir: Optional[Path] = typer.Option(
        None, "--artifacts-dir", "-d", help="Directory holding readme.md and .gitignore."
    ),
    report: Optional[Path] = typer.Option(None, "--report", "-r", help="Write a Markdown report to this path."),
    table: bool = typer.Option(False, "--table", help="Print a status table after the run."),
) -> None:
    """
    Runs the verification scenarios against the GitHub API.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
    configure_logging(settings.log_level)

    console_emitter = RichConsoleEmitter()
    event_collector = EventCollector()
    composite_emitter = CompositeEmitter([LoguruEmitter(), event_collector, console_emitter])

    try:
        scenarios = resolve_scenarios(scenario_names or [])
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    exit_code = 1
    try:
        summary = asyncio.run(
            run_scenarios(scenarios, settings, artifacts_dir or settings.artifacts_dir, composite_emitter)
        )
        exit_code = summary.exit_code
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        composite_emitter.emit(VerificationEvent(type=EventType.ERROR, message=str(e)))

    if table:
        console_emitter.print_table()

    if report:
        try:
            title = ", ".join(s.title for s in scenarios)
            MarkdownReporter().write_report(event_collector.get_events(), title, report)
            logger.info(f"Report generated: {report}")
        except Exception as report_err:
            logger.error(f"Failed to generate report: {report_err}")

    sys.exit(exit_code)


@app.command(name="list")
def list_scenarios() -> None:
    """
    Lists the available scenarios.
    """
    for name, build in SCENARIOS.items():
        typer.echo(f"{name}: {build().title}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
