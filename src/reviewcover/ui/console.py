"""Rich-powered console output for reviewcover."""

from __future__ import annotations

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from reviewcover.cover.models import ReviewReport


class Console:
    """Terminal output for reviewcover using Rich."""

    def __init__(self) -> None:
        self.console = RichConsole()
        self.err_console = RichConsole(stderr=True)

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def history_progress(self) -> Progress:
        """Create a progress bar for reading file history.

        Drawn on stderr so stdout stays clean for piping.
        """
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.err_console,
            transient=True,
        )

    def show_reviewer_list(self, report: ReviewReport) -> None:
        """Reviewer identities only, one per line."""
        for reviewer in report.reviewers:
            self.console.print(reviewer, markup=False, highlight=False)

    def show_assignments(self, report: ReviewReport) -> None:
        """Display each suggested reviewer with the changed files they know."""
        if not report.reviewers:
            self.warning("No reviewer has history on any of the changed files")
            return

        table = Table(
            title=f"Suggested reviewers ({len(report.reviewers)} for {len(report.files)} files)",
            border_style="cyan",
        )
        table.add_column("Reviewer", style="bold")
        table.add_column("Files", style="cyan")

        for reviewer in report.reviewers:
            files = report.assignments.get(reviewer, [])
            table.add_row(escape(reviewer), escape("\n".join(files)))

        self.console.print(table)

    def show_uncovered(self, report: ReviewReport) -> None:
        """Files nobody in the candidate pool has touched."""
        if not report.uncovered:
            return
        self.console.print(
            f"\n[bold yellow]No suitable reviewer for {len(report.uncovered)} file(s):[/bold yellow]"
        )
        for f in report.uncovered:
            self.console.print(f"  [dim]{escape(f)}[/dim]")

    def show_scores(self, report: ReviewReport) -> None:
        """Full file -> author -> score breakdown."""
        table = Table(title="Affinity scores", border_style="blue")
        table.add_column("File", style="cyan")
        table.add_column("Author")
        table.add_column("Score", justify="right")

        chosen = set(report.reviewers)
        for f in report.files:
            by_author = report.scores.get(f, {})
            if not by_author:
                table.add_row(escape(f), "[dim]-[/dim]", "")
                continue
            for i, (author, score) in enumerate(by_author.items()):
                name = f"[bold green]{escape(author)}[/bold green]" if author in chosen else escape(author)
                table.add_row(escape(f) if i == 0 else "", name, f"{score:.2f}")
            table.add_section()

        self.console.print(table)
