"""Async command support for Typer."""

import asyncio
from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any, TypeVar

import typer

from jira_authorization.cli.formatters import print_authorization_error, print_error
from jira_authorization.exceptions import JiraAuthorizationError

T = TypeVar("T")


def async_command(f: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., T]:
    """Decorator to run async Typer commands.

    Authorization errors are printed with their remediation hint and
    end the command with exit status 1.

    Usage:
        @app.command()
        @async_command
        async def my_command(ctx: typer.Context):
            manager = get_manager(ctx.obj)
            ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        async def run_with_error_handling() -> T:
            try:
                return await f(*args, **kwargs)
            except JiraAuthorizationError as e:
                print_authorization_error(e)
                raise typer.Exit(1) from None
            except ValueError as e:
                # Configuration problems
                print_error(str(e))
                raise typer.Exit(1) from None

        return asyncio.run(run_with_error_handling())

    return wrapper
