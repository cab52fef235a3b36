"""Main Typer application."""

import logging
from pathlib import Path

import typer

from jira_authorization.cli.config import CLIConfig
from jira_authorization.repository import get_store_path
from jira_authorization.config import DEFAULT_APP_TYPE

# Create main app
app = typer.Typer(
    name="jira-auth",
    help="Manage JIRA user authorization for the integration bridge.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="JSON config file (default: ~/.config/jira-authorization/config.json).",
        envvar="JIRA_AUTH_CONFIG",
    ),
    store_path: Path | None = typer.Option(
        None,
        "--store",
        help="JSON file holding user authorization records.",
        envvar="JIRA_AUTH_STORE",
    ),
    app_type: str = typer.Option(
        DEFAULT_APP_TYPE,
        "--type",
        "-t",
        help="Integration type of the application.",
    ),
    configuration_id: str = typer.Option(
        "default",
        "--configuration-id",
        "-i",
        help="Integration instance (configuration ID).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
) -> None:
    """JIRA OAuth 1.0a authorization tools.

    Validate the application key pair and run the authorization flow
    for a user from the command line.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ctx.obj = CLIConfig(
        app_type=app_type,
        configuration_id=configuration_id,
        verbose=verbose,
        config_path=config_path,
        store_path=store_path or get_store_path(),
    )
