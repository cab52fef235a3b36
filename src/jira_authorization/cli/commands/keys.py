"""Key pair commands."""

import typer

from jira_authorization.auth.keys import KeyMaterialLoader
from jira_authorization.cli.config import CLIConfig
from jira_authorization.cli.formatters import (
    console,
    print_authorization_error,
    print_error,
    print_key_table,
    print_success,
)
from jira_authorization.exceptions import JiraAuthorizationError

app = typer.Typer(no_args_is_help=True)


@app.command("check")
def check(
    ctx: typer.Context,
    show_public_key: bool = typer.Option(
        True,
        "--show-public-key/--hide-public-key",
        help="Print the public key to register in the JIRA application link.",
    ),
) -> None:
    """Validate the application public and private keys."""
    config: CLIConfig = ctx.obj

    try:
        properties = config.load_properties()
        application = properties.get_application(config.app_type)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1) from None
    except JiraAuthorizationError as e:
        print_authorization_error(e)
        raise typer.Exit(1) from None

    loader = KeyMaterialLoader(properties)
    auth = application.authorization
    keys = {
        "public": loader.resolve_public_key(auth, application.id),
        "private": loader.resolve_private_key(auth, application.id),
    }

    print_key_table(keys, title=f"Keys of application '{application.id}'")

    try:
        public_key = loader.validate_public_key(auth, application.id)
        private_key = loader.validate_private_key(auth, application.id)
    except JiraAuthorizationError as e:
        print_authorization_error(e)
        raise typer.Exit(1) from None

    if public_key is None or private_key is None:
        print_error("Key pair is incomplete")
        raise typer.Exit(1)

    print_success("Key pair is valid")

    if show_public_key:
        console.print(public_key)
