"""CLI configuration with XDG-compliant paths."""

from dataclasses import dataclass, field
from pathlib import Path

from jira_authorization.config import DEFAULT_APP_TYPE, IntegrationProperties, IntegrationSettings
from jira_authorization.repository import get_store_path


@dataclass
class CLIConfig:
    """Configuration passed through Typer context.

    Attributes:
        app_type: Integration type whose application settings are used.
        configuration_id: Integration instance the records belong to.
        verbose: Enable verbose output.
        config_path: JSON configuration file (None for the default location).
        store_path: JSON file holding user authorization records.
    """

    app_type: str = DEFAULT_APP_TYPE
    configuration_id: str = "default"
    verbose: bool = False
    config_path: Path | None = None
    store_path: Path = field(default_factory=get_store_path)

    @property
    def settings(self) -> IntegrationSettings:
        """Settings identifying the integration instance."""
        return IntegrationSettings(type=self.app_type, configuration_id=self.configuration_id)

    def load_properties(self) -> IntegrationProperties:
        """Load integration properties.

        An explicit config file wins; otherwise environment variables are
        tried before the default config file.

        Raises:
            ValueError: If no configuration can be found
        """
        try:
            if self.config_path is not None:
                return IntegrationProperties.from_file(self.config_path)
            return IntegrationProperties.load()
        except FileNotFoundError as e:
            msg = (
                f"{e}. Set JIRA_AUTH_BRIDGE_URL and JIRA_AUTH_CONSUMER_KEY "
                "or create ~/.config/jira-authorization/config.json"
            )
            raise ValueError(msg) from None
