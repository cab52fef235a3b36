"""Output formatters for CLI commands."""

from rich.console import Console
from rich.table import Table

from jira_authorization.auth.keys import KeyMaterial
from jira_authorization.exceptions import JiraAuthorizationError

console = Console()
error_console = Console(stderr=True)


def print_key_table(keys: dict[str, KeyMaterial], title: str | None = None) -> None:
    """Print the state of resolved keys as a rich table."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Key")
    table.add_column("File")
    table.add_column("Status")

    for name, material in keys.items():
        if material.is_valid:
            status = "[green]valid[/green]"
        elif material.is_absent:
            status = "[yellow]missing[/yellow]"
        else:
            status = "[red]invalid[/red]"
        table.add_row(name, material.filename, status)

    console.print(table)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]Error:[/red] {message}")


def print_authorization_error(error: JiraAuthorizationError) -> None:
    """Print an authorization error together with its remediation hint."""
    print_error(f"{error.message} [dim]({error.kind})[/dim]")
    if error.solution:
        error_console.print(f"[blue]i[/blue] {error.solution}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning:[/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")
