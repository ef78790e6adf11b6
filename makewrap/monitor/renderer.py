"""Rich terminal renderer for the post-build summary.

Turns a ``BuildResult`` into a Rich panel with line counts per category,
diagnostic counts per severity, and the build's exit status.  The summary
is written to stderr so it never interleaves with annotated build output.

Color scheme
------------
- red     : error
- yellow  : warning
- cyan    : note
"""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from makewrap.models.build import BuildResult
from makewrap.models.lines import LineKind

_KIND_LABELS: dict[LineKind, str] = {
    LineKind.ENTER: "Entered directories",
    LineKind.LEAVE: "Left directories",
    LineKind.DIAGNOSTIC: "Annotated diagnostics",
    LineKind.PASSTHROUGH: "Passed through",
}

_SEVERITY_STYLES: dict[str, str] = {
    "error": "bold red",
    "warning": "yellow",
    "note": "cyan",
}


class SummaryRenderer:
    """Renders ``BuildResult`` as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A stderr console is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def render(self, result: BuildResult) -> Panel:
        """Render a BuildResult as a Panel containing a counts table."""
        table = Table(
            show_header=True,
            header_style="bold cyan",
            expand=False,
            pad_edge=True,
        )
        table.add_column("Lines", min_width=22)
        table.add_column("Count", justify="right", width=8)

        for kind, label in _KIND_LABELS.items():
            table.add_row(label, str(result.counts.get(kind, 0)))

        for severity, style in _SEVERITY_STYLES.items():
            count = result.severities.get(severity, 0)
            if count:
                table.add_row(
                    f"[{style}]{severity}s[/{style}]",
                    f"[{style}]{count}[/{style}]",
                )

        if result.succeeded:
            status = f"[green]exit {result.exit_status}[/green]"
            border_style = "green"
        else:
            status = f"[bold red]exit {result.exit_status}[/bold red]"
            border_style = "red"

        footer = (
            f"[bold]Read:[/bold] {result.lines_read}  |  "
            f"[bold]Written:[/bold] {result.lines_written}  |  "
            f"[bold]Status:[/bold] {status}"
        )

        return Panel(
            Group(table, Text(""), Text.from_markup(footer)),
            title="[bold]makewrap[/bold]",
            border_style=border_style,
            padding=(1, 2),
        )

    def print(self, result: BuildResult) -> None:
        self.console.print(self.render(result))
