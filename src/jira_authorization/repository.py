"""Authorization record storage."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, TypeAlias

from jira_authorization.exceptions import JiraUnexpectedError
from jira_authorization.models.authorization import UserAuthorizationData

logger = logging.getLogger(__name__)

RecordKey: TypeAlias = tuple[str, str, str, int]


def get_store_path() -> Path:
    """Get default record storage path."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / "jira-authorization" / "authorizations.json"


def _matches(record: UserAuthorizationData, filter_: dict[str, str]) -> bool:
    data = record.data or {}
    return all(data.get(key) == value for key, value in filter_.items())


class AuthorizationRepository(Protocol):
    """Storage contract for per-user authorization records.

    Records are identified by (integration type, configuration id, url, user id).
    """

    async def find(
        self, integration_type: str, configuration_id: str, url: str, user_id: int
    ) -> UserAuthorizationData | None: ...

    async def search(
        self, integration_type: str, configuration_id: str, filter_: dict[str, str]
    ) -> list[UserAuthorizationData]: ...

    async def save(
        self, integration_type: str, configuration_id: str, record: UserAuthorizationData
    ) -> None: ...


class InMemoryAuthorizationRepository:
    """Process-local repository. Search results follow insertion order."""

    def __init__(self) -> None:
        self._records: dict[RecordKey, UserAuthorizationData] = {}

    async def find(
        self, integration_type: str, configuration_id: str, url: str, user_id: int
    ) -> UserAuthorizationData | None:
        record = self._records.get((integration_type, configuration_id, url, user_id))
        return record.model_copy(deep=True) if record else None

    async def search(
        self, integration_type: str, configuration_id: str, filter_: dict[str, str]
    ) -> list[UserAuthorizationData]:
        return [
            record.model_copy(deep=True)
            for (type_, config_id, _, _), record in self._records.items()
            if type_ == integration_type and config_id == configuration_id
            and _matches(record, filter_)
        ]

    async def save(
        self, integration_type: str, configuration_id: str, record: UserAuthorizationData
    ) -> None:
        key = (integration_type, configuration_id, record.url, record.user_id)
        self._records[key] = record.model_copy(deep=True)


class JsonFileAuthorizationRepository:
    """Persistent repository storing every record in one JSON file.

    For production use, consider encrypting the file or using a database.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or get_store_path()

    async def find(
        self, integration_type: str, configuration_id: str, url: str, user_id: int
    ) -> UserAuthorizationData | None:
        for entry in self._load():
            if (entry["type"], entry["configurationId"]) != (integration_type, configuration_id):
                continue
            record = UserAuthorizationData.model_validate(entry["record"])
            if record.url == url and record.user_id == user_id:
                return record
        return None

    async def search(
        self, integration_type: str, configuration_id: str, filter_: dict[str, str]
    ) -> list[UserAuthorizationData]:
        records = [
            UserAuthorizationData.model_validate(entry["record"])
            for entry in self._load()
            if (entry["type"], entry["configurationId"]) == (integration_type, configuration_id)
        ]
        return [record for record in records if _matches(record, filter_)]

    async def save(
        self, integration_type: str, configuration_id: str, record: UserAuthorizationData
    ) -> None:
        entries = [
            entry
            for entry in self._load()
            if not (
                entry["type"] == integration_type
                and entry["configurationId"] == configuration_id
                and entry["record"]["url"] == record.url
                and entry["record"]["userId"] == record.user_id
            )
        ]
        entries.append(
            {
                "type": integration_type,
                "configurationId": configuration_id,
                "record": record.model_dump(by_alias=True),
            }
        )

        self._write(entries)
        logger.debug("Saved authorization record for user %s at %s", record.user_id, record.url)

    def _load(self) -> list[dict]:
        if not self.path.exists():
            return []

        try:
            with self.path.open() as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise JiraUnexpectedError(
                f"Authorization store {self.path} is corrupted: {e}",
                component="JSON Authorization Repository",
            ) from e

    def _write(self, entries: list[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # mkstemp creates the file with owner read/write only
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(entries, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
