"""Configuration management for JIRA authorization."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jira_authorization.exceptions import (
    ApplicationNotFoundError,
    CertificateDirectoryNotFoundError,
)
from jira_authorization.models.authorization import AppAuthorizationModel

DEFAULT_APP_TYPE = "jiraWebHookIntegration"
DEFAULT_APP_ID = "jira"


def _get_config_dir() -> Path:
    """Get XDG-compliant config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "jira-authorization"
    return Path.home() / ".config" / "jira-authorization"


@dataclass(frozen=True, slots=True)
class IntegrationSettings:
    """Identifies one configured integration instance."""

    type: str
    configuration_id: str


@dataclass(frozen=True, slots=True)
class Application:
    """Application entry of the integration bridge configuration."""

    id: str
    authorization: AppAuthorizationModel = field(default_factory=AppAuthorizationModel)


@dataclass(frozen=True, slots=True)
class IntegrationProperties:
    """Integration bridge configuration consumed by the authorization manager."""

    integration_bridge_url: str
    certs_directory: Path | None = None
    applications: dict[str, Application] = field(default_factory=dict)

    def get_application(self, app_type: str) -> Application:
        """Get the application configured for an integration type."""
        application = self.applications.get(app_type)
        if application is None:
            raise ApplicationNotFoundError(
                f"No application configured for integration type '{app_type}'",
                app_type=app_type,
            )
        return application

    def get_integration_bridge_url(self) -> str:
        """Get the public base URL of the integration bridge."""
        return self.integration_bridge_url.rstrip("/")

    def get_certs_directory(self) -> Path:
        """Get the directory holding application certificates and keys."""
        if self.certs_directory is None or not self.certs_directory.is_dir():
            raise CertificateDirectoryNotFoundError(
                f"Certificate directory not found: {self.certs_directory}"
            )
        return self.certs_directory

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> IntegrationProperties:
        """Build properties from a decoded configuration document.

        Expected format:
        {
            "integrationBridgeUrl": "https://bridge.example.com",
            "certsDirectory": "/opt/bridge/certs",
            "applications": {
                "jiraWebHookIntegration": {
                    "id": "jira",
                    "authorization": {"consumerKey": "...", "properties": {...}}
                }
            }
        }
        """
        certs_dir = data.get("certsDirectory")
        applications = {
            app_type: Application(
                id=entry["id"],
                authorization=AppAuthorizationModel.model_validate(
                    entry.get("authorization", {})
                ),
            )
            for app_type, entry in data.get("applications", {}).items()
        }

        return cls(
            integration_bridge_url=data["integrationBridgeUrl"],
            certs_directory=Path(certs_dir) if certs_dir else None,
            applications=applications,
        )

    @classmethod
    def from_env(cls) -> IntegrationProperties:
        """Create properties for a single application from environment variables.

        Expected env vars:
        - JIRA_AUTH_BRIDGE_URL
        - JIRA_AUTH_CERTS_DIR
        - JIRA_AUTH_CONSUMER_KEY
        - JIRA_AUTH_APP_ID (optional, default "jira")
        - JIRA_AUTH_APP_TYPE (optional, default "jiraWebHookIntegration")
        """
        bridge_url = os.environ.get("JIRA_AUTH_BRIDGE_URL")
        consumer_key = os.environ.get("JIRA_AUTH_CONSUMER_KEY")

        if not bridge_url or not consumer_key:
            msg = (
                "Missing required environment variables: "
                "JIRA_AUTH_BRIDGE_URL and JIRA_AUTH_CONSUMER_KEY"
            )
            raise ValueError(msg)

        certs_dir = os.environ.get("JIRA_AUTH_CERTS_DIR")
        app_type = os.environ.get("JIRA_AUTH_APP_TYPE", DEFAULT_APP_TYPE)
        app_id = os.environ.get("JIRA_AUTH_APP_ID", DEFAULT_APP_ID)

        return cls(
            integration_bridge_url=bridge_url,
            certs_directory=Path(certs_dir) if certs_dir else None,
            applications={
                app_type: Application(
                    id=app_id,
                    authorization=AppAuthorizationModel(consumer_key=consumer_key),
                )
            },
        )

    @classmethod
    def from_file(cls, path: Path | None = None) -> IntegrationProperties:
        """Load properties from JSON file.

        Default path: ~/.config/jira-authorization/config.json
        """
        if path is None:
            path = _get_config_dir() / "config.json"

        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with path.open() as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def load(cls, path: Path | None = None) -> IntegrationProperties:
        """Load properties from environment or file (env takes precedence)."""
        try:
            return cls.from_env()
        except ValueError:
            return cls.from_file(path)
