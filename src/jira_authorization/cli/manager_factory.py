"""Manager factory for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jira_authorization.manager import JiraAuthorizationManager
from jira_authorization.repository import JsonFileAuthorizationRepository

if TYPE_CHECKING:
    from jira_authorization.cli.config import CLIConfig


def get_manager(config: CLIConfig) -> JiraAuthorizationManager:
    """Create a JiraAuthorizationManager for CLI use.

    Properties come from the config file (or environment variables) and
    user records are kept in the CLI's JSON store (XDG_DATA_HOME).
    """
    properties = config.load_properties()
    repository = JsonFileAuthorizationRepository(config.store_path)
    return JiraAuthorizationManager(properties, repository)
