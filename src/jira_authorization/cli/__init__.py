"""JIRA authorization CLI."""

from jira_authorization.cli.app import app

# Import command modules to register them with the app
from jira_authorization.cli.commands import auth, keys

# Register sub-apps
app.add_typer(auth.app, name="auth", help="User authorization flow.")
app.add_typer(keys.app, name="keys", help="Application key pair checks.")


def main() -> None:
    """Entry point for the CLI."""
    app()


__all__ = ["app", "main"]
