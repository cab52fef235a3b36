"""JIRA user authorization for the integration bridge.

Three-legged OAuth 1.0a with RSA-SHA1 signatures, letting the bridge call
JIRA on behalf of users who granted it access.

Example:
    from jira_authorization import (
        InMemoryAuthorizationRepository,
        IntegrationProperties,
        IntegrationSettings,
        JiraAuthorizationManager,
    )

    properties = IntegrationProperties.load()
    manager = JiraAuthorizationManager(properties, InMemoryAuthorizationRepository())
    settings = IntegrationSettings(type="jiraWebHookIntegration", configuration_id="42")

    # Redirect the user to JIRA
    url = await manager.get_authorization_url(settings, "https://jira.example.com", 1234)

    # JIRA calls back with oauth_token and oauth_verifier
    await manager.authorize_temporary_token(settings, oauth_token, oauth_verifier)

    # Later
    if await manager.is_user_authorized(settings, "https://jira.example.com", 1234):
        ...
"""

from jira_authorization.auth import JiraOAuth1Provider, KeyMaterial, KeyMaterialLoader
from jira_authorization.config import Application, IntegrationProperties, IntegrationSettings
from jira_authorization.exceptions import (
    ApplicationNotFoundError,
    CertificateDirectoryNotFoundError,
    InvalidServiceUrlError,
    JiraAuthorizationError,
    JiraUnexpectedError,
    KeyValidationError,
    OAuth1Error,
    TokenNotFoundError,
)
from jira_authorization.manager import JiraAuthorizationManager
from jira_authorization.repository import (
    AuthorizationRepository,
    InMemoryAuthorizationRepository,
    JsonFileAuthorizationRepository,
)

__version__ = "0.1.0"

__all__ = [
    # Manager
    "JiraAuthorizationManager",
    # OAuth and keys
    "JiraOAuth1Provider",
    "KeyMaterial",
    "KeyMaterialLoader",
    # Configuration
    "Application",
    "IntegrationProperties",
    "IntegrationSettings",
    # Storage
    "AuthorizationRepository",
    "InMemoryAuthorizationRepository",
    "JsonFileAuthorizationRepository",
    # Exceptions
    "ApplicationNotFoundError",
    "CertificateDirectoryNotFoundError",
    "InvalidServiceUrlError",
    "JiraAuthorizationError",
    "JiraUnexpectedError",
    "KeyValidationError",
    "OAuth1Error",
    "TokenNotFoundError",
]
