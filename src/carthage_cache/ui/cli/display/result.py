"""src/carthage_cache/ui/cli/display/result.py
What: Render the per-unit outcome table after a retrieval run.
Why: Keep console output formatting out of the command flow.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import final

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from carthage_cache.application.services import UnitResult


@final
class ResultDisplay:
    """Handles result display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_results(self, results: Sequence[UnitResult], quiet: bool = False) -> None:
        """Display retrieval results.

        Args:
            results: Outcomes of every executed unit.
            quiet: Whether to suppress the table; failures are still listed.
        """
        failures = [result for result in results if not result.success]

        if not quiet:
            table = Table(title="Retrieval Summary", box=box.SIMPLE_HEAVY)
            table.add_column("Artifact")
            table.add_column("Kind")
            table.add_column("Status")
            for result in results:
                status = Text("ok", style="green") if result.success else Text("failed", style="red")
                table.add_row(result.label, result.kind.value, status)
            self.console.print(table)
            self.console.print(
                f"Total: {len(results)}  "
                f"[green]Succeeded: {len(results) - len(failures)}[/green]  "
                f"[red]Failed: {len(failures)}[/red]"
            )

        for failed in failures:
            self.console.print(Text(f"  • {failed.label}: {failed.error_message}", style="red"))


__all__ = ["ResultDisplay"]
