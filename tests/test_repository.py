"""Tests for authorization record repositories."""

import json
import stat
from pathlib import Path

import pytest

from jira_authorization.cli.config import CLIConfig
from jira_authorization.exceptions import JiraUnexpectedError
from jira_authorization.models.authorization import JiraOAuth1Data, UserAuthorizationData
from jira_authorization.repository import (
    InMemoryAuthorizationRepository,
    JsonFileAuthorizationRepository,
)

JIRA_URL = "https://jira.example.com"


def make_record(
    user_id: int, temporary_token: str, access_token: str | None = None
) -> UserAuthorizationData:
    return UserAuthorizationData.from_oauth1_data(
        JIRA_URL,
        user_id,
        JiraOAuth1Data(temporary_token=temporary_token, access_token=access_token),
    )


@pytest.fixture(params=["memory", "json"])
def repository(request: pytest.FixtureRequest, tmp_path: Path):
    """Run every contract test against both implementations."""
    if request.param == "memory":
        return InMemoryAuthorizationRepository()
    return JsonFileAuthorizationRepository(tmp_path / "store" / "authorizations.json")


class TestRepositoryContract:
    """Behavior shared by all repositories."""

    async def test_find_missing(self, repository) -> None:
        assert await repository.find("jira", "42", JIRA_URL, 1) is None

    async def test_save_then_find(self, repository) -> None:
        await repository.save("jira", "42", make_record(1, "temp"))

        record = await repository.find("jira", "42", JIRA_URL, 1)

        assert record is not None
        assert record.user_id == 1
        assert record.data == {"temporaryToken": "temp", "accessToken": None}

    async def test_key_includes_type_and_configuration(self, repository) -> None:
        await repository.save("jira", "42", make_record(1, "temp"))

        assert await repository.find("jira", "43", JIRA_URL, 1) is None
        assert await repository.find("other", "42", JIRA_URL, 1) is None

    async def test_save_overwrites_same_key(self, repository) -> None:
        await repository.save("jira", "42", make_record(1, "old"))
        await repository.save("jira", "42", make_record(1, "new", "access"))

        records = await repository.search("jira", "42", {})

        assert len(records) == 1
        assert records[0].data == {"temporaryToken": "new", "accessToken": "access"}

    async def test_search_by_temporary_token(self, repository) -> None:
        await repository.save("jira", "42", make_record(1, "a"))
        await repository.save("jira", "42", make_record(2, "b"))
        await repository.save("jira", "43", make_record(3, "b"))

        records = await repository.search("jira", "42", {"temporaryToken": "b"})

        assert [record.user_id for record in records] == [2]

    async def test_search_without_match(self, repository) -> None:
        await repository.save("jira", "42", make_record(1, "a"))

        assert await repository.search("jira", "42", {"temporaryToken": "zzz"}) == []

    async def test_returned_records_are_copies(self, repository) -> None:
        await repository.save("jira", "42", make_record(1, "a"))

        record = await repository.find("jira", "42", JIRA_URL, 1)
        assert record is not None
        record.set_oauth1_data(JiraOAuth1Data(temporary_token="changed"))

        stored = await repository.find("jira", "42", JIRA_URL, 1)
        assert stored is not None
        assert stored.data == {"temporaryToken": "a", "accessToken": None}


class TestJsonFileRepository:
    """Tests specific to the JSON file repository."""

    async def test_file_has_owner_only_permissions(self, tmp_path: Path) -> None:
        path = tmp_path / "authorizations.json"
        repository = JsonFileAuthorizationRepository(path)

        await repository.save("jira", "42", make_record(1, "a"))

        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    async def test_persists_across_instances(self, tmp_path: Path) -> None:
        path = tmp_path / "authorizations.json"
        await JsonFileAuthorizationRepository(path).save("jira", "42", make_record(1, "a"))

        record = await JsonFileAuthorizationRepository(path).find("jira", "42", JIRA_URL, 1)

        assert record is not None
        assert json.loads(path.read_text())[0]["configurationId"] == "42"

    async def test_failed_write_keeps_previous_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "authorizations.json"
        repository = JsonFileAuthorizationRepository(path)
        await repository.save("jira", "42", make_record(1, "a"))
        before = path.read_text()

        def fail_midway(entries, f, **kwargs) -> None:
            f.write("[{")
            raise OSError("disk full")

        monkeypatch.setattr("jira_authorization.repository.json.dump", fail_midway)

        with pytest.raises(OSError, match="disk full"):
            await repository.save("jira", "42", make_record(2, "b"))

        assert path.read_text() == before
        assert [p.name for p in tmp_path.iterdir()] == ["authorizations.json"]

    async def test_corrupted_file(self, tmp_path: Path) -> None:
        path = tmp_path / "authorizations.json"
        path.write_text("{not json")

        with pytest.raises(JiraUnexpectedError) as exc_info:
            await JsonFileAuthorizationRepository(path).find("jira", "42", JIRA_URL, 1)

        assert exc_info.value.component == "JSON Authorization Repository"

    def test_default_path_uses_xdg_data_home(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        repository = JsonFileAuthorizationRepository()

        assert repository.path == tmp_path / "jira-authorization" / "authorizations.json"

    def test_cli_uses_repository_default_path(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert CLIConfig().store_path == JsonFileAuthorizationRepository().path
