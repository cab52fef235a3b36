"""Tests for the jira-auth command-line interface."""

import asyncio
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from jira_authorization.cli import app
from jira_authorization.models.authorization import JiraOAuth1Data, UserAuthorizationData
from jira_authorization.repository import JsonFileAuthorizationRepository
from tests.conftest import APP_ID, APP_TYPE, BRIDGE_URL, JIRA_URL

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path, certs_dir: Path) -> Path:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "integrationBridgeUrl": BRIDGE_URL,
                "certsDirectory": str(certs_dir),
                "applications": {
                    APP_TYPE: {"id": APP_ID, "authorization": {"consumerKey": "bridge"}}
                },
            }
        )
    )
    return path


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "authorizations.json"


def invoke(config_file: Path, store_path: Path, *args: str):
    return runner.invoke(
        app,
        ["--config", str(config_file), "--store", str(store_path), "-i", "42", *args],
    )


class TestKeysCheck:
    """Tests for 'keys check'."""

    def test_valid_key_pair(self, config_file: Path, store_path: Path) -> None:
        result = invoke(config_file, store_path, "keys", "check")

        assert result.exit_code == 0
        assert "Key pair is valid" in result.output

    def test_prints_public_key_body(
        self, config_file: Path, store_path: Path, public_key_pem: str
    ) -> None:
        first_line = public_key_pem.splitlines()[1]

        shown = invoke(config_file, store_path, "keys", "check")
        hidden = invoke(config_file, store_path, "keys", "check", "--hide-public-key")

        assert first_line in shown.output
        assert first_line not in hidden.output

    def test_corrupted_key(self, config_file: Path, store_path: Path, certs_dir: Path) -> None:
        (certs_dir / f"{APP_ID}_app_pub.pem").write_text("garbage")

        result = invoke(config_file, store_path, "keys", "check")

        assert result.exit_code == 1
        assert "key_validation" in result.output

    def test_missing_key(self, config_file: Path, store_path: Path, certs_dir: Path) -> None:
        (certs_dir / f"{APP_ID}_app.pkcs8").unlink()

        result = invoke(config_file, store_path, "keys", "check")

        assert result.exit_code == 1
        assert "incomplete" in result.output

    def test_missing_config(self, tmp_path: Path, store_path: Path) -> None:
        result = invoke(tmp_path / "missing.json", store_path, "keys", "check")

        assert result.exit_code == 1


class TestAuthCommands:
    """Tests for 'auth' commands."""

    def test_status_without_record(self, config_file: Path, store_path: Path) -> None:
        result = invoke(config_file, store_path, "auth", "status", JIRA_URL, "1234")

        assert result.exit_code == 0
        assert "not authorized" in result.output

    def test_status_with_pending_record(self, config_file: Path, store_path: Path) -> None:
        record = UserAuthorizationData.from_oauth1_data(
            JIRA_URL, 1234, JiraOAuth1Data(temporary_token="temp")
        )
        asyncio.run(JsonFileAuthorizationRepository(store_path).save(APP_TYPE, "42", record))

        result = invoke(config_file, store_path, "auth", "status", JIRA_URL, "1234")

        assert result.exit_code == 0
        assert "not authorized" in result.output

    def test_authorize_unknown_token(self, config_file: Path, store_path: Path) -> None:
        result = invoke(config_file, store_path, "auth", "authorize", "forged", "verifier")

        assert result.exit_code == 1
        assert "token_not_found" in result.output

    def test_url_with_invalid_service_url(self, config_file: Path, store_path: Path) -> None:
        result = invoke(config_file, store_path, "auth", "url", "not-a-url", "1234")

        assert result.exit_code == 1
        assert "invalid_service_url" in result.output
