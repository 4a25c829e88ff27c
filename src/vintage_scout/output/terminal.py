import logging

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..models.opportunity import Opportunity

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """Rich terminal output for opportunities and run summaries."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    async def notify(self, opportunities: list[Opportunity]) -> None:
        try:
            self.display_opportunities(opportunities)
        except Exception as e:
            logger.error(f"Console notification failed: {e}")

    def display_opportunities(self, opportunities: list[Opportunity]):
        self.console.print()
        self.console.print(
            Panel(
                f"[bold white]Vintage Opportunities Found[/bold white]\n"
                f"[dim]{len(opportunities)} listings cleared the thresholds[/dim]",
                border_style="green",
            )
        )
        for i, opp in enumerate(opportunities, 1):
            self._display_single(opp, i)

    def _display_single(self, opp: Opportunity, index: int):
        listing, appraisal = opp.listing, opp.appraisal

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Field", style="bold cyan", width=18)
        table.add_column("Value")

        table.add_row("Title", listing.title[:80])
        table.add_row("Listed Price", f"${listing.price:.2f}")
        if appraisal.estimated_value is not None:
            table.add_row("Estimated Value", f"[bold green]${appraisal.estimated_value:.2f}[/bold green]")
        table.add_row("Potential Margin", f"[bold green]${opp.margin:.2f}[/bold green]")
        if opp.roi_pct is not None:
            table.add_row("Est. ROI", f"{opp.roi_pct:.0f}%")
        table.add_row("Era", appraisal.estimated_era)
        table.add_row("Confidence", f"{appraisal.confidence * 100:.0f}%")

        reasoning = appraisal.reasoning[:200]
        if len(appraisal.reasoning) > 200:
            reasoning += "..."
        table.add_row("Reasoning", f"[dim]{reasoning}[/dim]")

        if appraisal.red_flags:
            table.add_row("Red Flags", f"[yellow]{', '.join(appraisal.red_flags)}[/yellow]")
        if appraisal.references:
            table.add_row("References", ", ".join(appraisal.references))
        table.add_row("Link", f"[link={listing.url}]{listing.url}[/link]")

        self.console.print(
            Panel(table, title=f"[bold]#{index}[/bold]", border_style="green")
        )

    def display_summary(self, summary):
        """Display the counts of a completed run."""
        self.console.print()
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Metric", style="bold")
        table.add_column("Value", style="bold green")
        table.add_row("Listings fetched", str(summary.fetched))
        table.add_row("Passed filter", str(summary.filtered))
        table.add_row("Evaluated", str(summary.evaluated))
        table.add_row("Skipped (already appraised)", str(summary.skipped))
        table.add_row("Errors", f"[red]{summary.errors}[/red]" if summary.errors else "0")
        table.add_row("Opportunities", str(len(summary.opportunities)))
        self.console.print(Panel(table, title="[bold]Scan Summary[/bold]"))
        self.console.print()
