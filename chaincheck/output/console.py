"""Console output formatters using Rich."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models import CheckResult, LookupResult
from .messages import unit_diagnostics

console = Console()


def print_diagnostics(result: CheckResult, out: Console = console, decorator: str = "required_props") -> int:
    """Print every diagnostic compiler-style and return how many were printed."""
    count = 0
    for report in result.files:
        for unit in report.units:
            for diagnostic in unit_diagnostics(unit, decorator):
                where = str(diagnostic.location) if diagnostic.location else "<unknown>"
                out.print(f"[bold]{escape(where)}[/bold]: [red]error[/red]: {escape(diagnostic.message)}", soft_wrap=True)
                count += 1
    return count


def print_summary(result: CheckResult, count: int, out: Console = console):
    files = len(result.files)
    units = result.unit_count
    if count:
        out.print(f"[red]Found {count} error(s)[/red] in {units} function(s) across {files} file(s)", soft_wrap=True)
    else:
        out.print(f"[green]No problems found[/green] in {units} function(s) across {files} file(s)", soft_wrap=True)


def print_lookup(result: LookupResult, out: Console = console):
    """Print required arguments per service."""
    if not result.found:
        out.print(f"[dim]No required arguments known for {escape(result.method)}[/dim]")
        return

    table = Table(title=f"Required arguments of {result.method}")
    table.add_column("Service", style="bold")
    table.add_column("Required arguments")
    for service, args in sorted(result.requirements.items()):
        table.add_row(service, ", ".join(args) or "[dim]none[/dim]")
    out.print(table)


def print_services(services: tuple[str, ...], out: Console = console):
    for service in services:
        out.print(service)
    out.print(f"[dim]{len(services)} service(s)[/dim]")
