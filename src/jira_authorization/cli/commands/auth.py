"""User authorization commands."""

import webbrowser

import typer

from jira_authorization.cli.async_runner import async_command
from jira_authorization.cli.config import CLIConfig
from jira_authorization.cli.formatters import console, print_info, print_success, print_warning
from jira_authorization.cli.manager_factory import get_manager

app = typer.Typer(no_args_is_help=True)


@app.command("url")
@async_command
async def url(
    ctx: typer.Context,
    service_url: str = typer.Argument(..., help="JIRA base URL."),
    user_id: int = typer.Argument(..., help="User ID on the messaging platform."),
    open_browser: bool = typer.Option(
        False,
        "--open",
        help="Open the consent page in a browser.",
    ),
) -> None:
    """Start the OAuth flow and print the JIRA consent URL."""
    config: CLIConfig = ctx.obj
    manager = get_manager(config)

    print_info(f"Requesting temporary token from {service_url}...")
    authorization_url = await manager.get_authorization_url(
        config.settings, service_url, user_id
    )

    console.print("\nOpen this URL in your browser:")
    console.print(f"[link]{authorization_url}[/link]")

    if open_browser:
        webbrowser.open(authorization_url)


@app.command("authorize")
@async_command
async def authorize(
    ctx: typer.Context,
    temporary_token: str = typer.Argument(..., help="oauth_token sent to the callback."),
    verifier: str = typer.Argument(..., help="oauth_verifier sent to the callback."),
) -> None:
    """Exchange the verifier code for an access token."""
    config: CLIConfig = ctx.obj
    manager = get_manager(config)

    print_info("Exchanging verification code for access token...")
    await manager.authorize_temporary_token(config.settings, temporary_token, verifier.strip())

    print_success(f"Authorized! Record saved to {config.store_path}")


@app.command("status")
@async_command
async def status(
    ctx: typer.Context,
    service_url: str = typer.Argument(..., help="JIRA base URL."),
    user_id: int = typer.Argument(..., help="User ID on the messaging platform."),
) -> None:
    """Check whether a user has authorized access to JIRA."""
    config: CLIConfig = ctx.obj
    manager = get_manager(config)

    if await manager.is_user_authorized(config.settings, service_url, user_id):
        print_success(f"User {user_id} is authorized at {service_url}")
    else:
        print_warning(f"User {user_id} is not authorized at {service_url}")
        print_info("Run 'jira-auth auth url' to start the authorization flow")
