"""Tests for async_runner module."""

import pytest
import typer

from jira_authorization.cli.async_runner import async_command
from jira_authorization.exceptions import OAuth1Error, TokenNotFoundError


class TestAsyncCommand:
    """Tests for running async commands."""

    def test_returns_coroutine_result(self) -> None:
        @async_command
        async def command(value: int) -> int:
            return value * 2

        assert command(21) == 42

    def test_authorization_error_exits_with_status_1(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Should print the error kind and remediation hint."""

        @async_command
        async def command() -> None:
            raise TokenNotFoundError("No authorization data", temporary_token="abc")

        with pytest.raises(typer.Exit) as exc_info:
            command()

        assert exc_info.value.exit_code == 1
        err = capsys.readouterr().err
        assert "token_not_found" in err
        assert "expired" in err

    def test_configuration_error_exits_with_status_1(self) -> None:
        @async_command
        async def command() -> None:
            raise ValueError("Missing credentials")

        with pytest.raises(typer.Exit):
            command()

    def test_other_errors_propagate(self) -> None:
        @async_command
        async def command() -> None:
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError):
            command()

    def test_preserves_wrapped_function(self) -> None:
        async def command() -> None:
            raise OAuth1Error("unused")

        wrapped = async_command(command)

        assert wrapped.__wrapped__ is command
        assert wrapped.__name__ == "command"
