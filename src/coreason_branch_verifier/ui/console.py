# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_branch_verifier

from typing import Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from coreason_branch_verifier.events import EventType, VerificationEvent


class RichConsoleEmitter:
    """
    Renders verification events as one line per check on the terminal.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(highlight=False)
        self.checks: Dict[str, Dict[str, str]] = {}  # check_name -> {status, message}

    def generate_table(self) -> Table:
        table = Table(title="Branch Verification Status", expand=True)
        table.add_column("Check", style="cyan")
        table.add_column("Status", justify="center")
        table.add_column("Details", style="dim")

        for name, data in self.checks.items():
            status = data.get("status", "running")
            msg = data.get("message", "")

            icon = "⏳"
            style = "yellow"
            if status == "pass":
                icon = "✅"
                style = "green"
            elif status == "fail":
                icon = "❌"
                style = "red"

            table.add_row(name, icon, msg, style=style)

        return table

    def emit(self, event: VerificationEvent) -> None:
        if event.type == EventType.RUN_START:
            self.console.print(f"Testing: {escape(event.message)}\n")

        elif event.type == EventType.CHECK_RUNNING:
            self.checks[event.message] = {"status": "running", "message": ""}

        elif event.type == EventType.CHECK_RESULT:
            status = event.payload.get("status", "pass")
            error = event.payload.get("error", "")
            self.checks[event.message] = {"status": status, "message": error}
            if status == "pass":
                self.console.print(f"  [green]✓[/green] {escape(event.message)}")
            else:
                self.console.print(f"  [red]✗[/red] {escape(event.message)}")
                self.console.print(f"    {escape(error)}", style="dim")

        elif event.type == EventType.RUN_SUMMARY:
            self.console.print(f"\n{escape(event.message)}\n")

        elif event.type == EventType.ERROR:
            self.console.print(f"[bold red]Fatal error:[/bold red] {escape(event.message)}")

    def print_table(self) -> None:
        self.console.print(self.generate_table())
