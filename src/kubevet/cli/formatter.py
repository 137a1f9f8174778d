# src/kubevet/cli/formatter.py
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from kubevet.core.models import Diagnostic
from kubevet.validator.reporter import format_diagnostic

# Reports go to stdout, diagnostics to stderr
console = Console()
err_console = Console(stderr=True)


class KubeFormatter:
    """
    KubeFormatter: the visual layer of the CLI.
    Renders diagnostics, the per-file report table and the summary panel.
    """

    def print_diagnostics(self, file_name: str, diagnostics: List[Diagnostic]):
        """
        One `<file>:<line> <message>` line per diagnostic, unstyled, so the
        output stays grep-able and editor-clickable.
        """
        for diagnostic in diagnostics:
            err_console.print(
                format_diagnostic(file_name, diagnostic),
                markup=False, highlight=False, soft_wrap=True,
            )

    def print_final_table(self, reports: List[Dict[str, Any]]):
        table = Table(title="KubeVet Validation Report", show_lines=True, header_style="bold magenta")
        table.add_column("File Path", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Diagnostics", justify="right")
        table.add_column("Result", justify="center")

        for r in reports:
            success = r.get("success", False)
            status_color = "green" if success else "red"
            result_icon = "✅" if success else "❌"
            table.add_row(
                escape(str(r.get("file_path"))),
                f"[{status_color}]{r.get('status', 'INVALID')}[/{status_color}]",
                str(len(r.get("diagnostics", []))),
                result_icon,
            )

        console.print(table)

    def print_summary(self, summary: Dict[str, Any]):
        console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Total Files:    {summary['total_files']}\n"
            f"Valid:          [green]{summary['valid']}[/green]\n"
            f"Invalid:        [red]{summary['invalid']}[/red]\n"
            f"Read Errors:    [red]{summary['read_errors']}[/red]\n"
            f"Diagnostics:    {summary['diagnostics']}\n"
            f"Success Rate:   [bold green]{summary['success_rate']:.1%}[/bold green]",
            border_style="dim"
        ))
