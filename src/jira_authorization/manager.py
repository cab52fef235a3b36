"""Authorization manager for the JIRA integration.

Resolves the application key pair and callback URL of each configured
integration instance and drives the OAuth 1.0a flow on behalf of users:

1. get_authorization_url: request a temporary token, store it, and return the
   JIRA consent URL
2. authorize_temporary_token: exchange the verifier JIRA sends to the callback
   for an access token and store it
3. is_user_authorized: call JIRA /myself with the stored access token
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlsplit

from pydantic import ValidationError

from jira_authorization.auth.keys import KeyMaterialLoader
from jira_authorization.auth.oauth import JiraOAuth1Provider
from jira_authorization.exceptions import (
    InvalidServiceUrlError,
    OAuth1Error,
    TokenNotFoundError,
)
from jira_authorization.models.authorization import (
    JiraOAuth1Data,
    ResolvedAuthorizationModel,
    UserAuthorizationData,
)

if TYPE_CHECKING:
    from jira_authorization.config import IntegrationProperties, IntegrationSettings
    from jira_authorization.repository import AuthorizationRepository

logger = logging.getLogger(__name__)

AUTH_CALLBACK_PATH = "/v1/application/{configuration_id}/authorization/authorize"
MYSELF_PATH = "/rest/api/2/myself"
TEMPORARY_TOKEN_FILTER = "temporaryToken"
UNAUTHORIZED = 401


def _validate_service_url(url: str) -> str:
    """Check that url is an absolute http(s) URL."""
    try:
        parts = urlsplit(url)
        # Raises on a non-numeric or out of range port
        parts.port
    except ValueError as e:
        raise InvalidServiceUrlError(f"Invalid JIRA URL: {url}", url=url) from e

    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise InvalidServiceUrlError(f"Invalid JIRA URL: {url}", url=url)
    return url


class JiraAuthorizationManager:
    """Drives JIRA user authorization for every configured integration instance.

    Usage:
        manager = JiraAuthorizationManager(properties, repository)
        url = await manager.get_authorization_url(settings, jira_url, user_id)
        # ... user grants access, JIRA calls back with oauth_token/oauth_verifier
        await manager.authorize_temporary_token(settings, oauth_token, oauth_verifier)
        assert await manager.is_user_authorized(settings, jira_url, user_id)
    """

    def __init__(
        self,
        properties: IntegrationProperties,
        repository: AuthorizationRepository,
        *,
        key_loader: KeyMaterialLoader | None = None,
        provider_factory: Callable[[], JiraOAuth1Provider] = JiraOAuth1Provider,
    ) -> None:
        """Initialize the manager.

        Args:
            properties: Integration bridge configuration
            repository: Storage for user authorization records
            key_loader: Optional key loader (built from properties if not provided)
            provider_factory: Creates an unconfigured OAuth provider; called once
                             per operation so providers are never shared
        """
        self.properties = properties
        self.repository = repository
        self.key_loader = key_loader or KeyMaterialLoader(properties)
        self.provider_factory = provider_factory

    def get_authorization_model(self, settings: IntegrationSettings) -> ResolvedAuthorizationModel:
        """Provide the authorization settings of the JIRA application.

        The configured model is left untouched; the public key found on disk
        (or None) is returned alongside it.
        """
        application = self.properties.get_application(settings.type)
        auth = application.authorization

        public_key = self.key_loader.resolve_public_key(auth, application.id)

        return ResolvedAuthorizationModel(
            application_id=application.id,
            consumer_key=auth.get_consumer_key(),
            public_key=public_key.key,
            authorization=auth,
        )

    def get_callback_url(self, settings: IntegrationSettings) -> str:
        """Build the URL JIRA redirects users to after they grant access."""
        path = AUTH_CALLBACK_PATH.format(configuration_id=settings.configuration_id)
        return self.properties.get_integration_bridge_url() + path

    def _get_private_key(self, settings: IntegrationSettings) -> str | None:
        application = self.properties.get_application(settings.type)
        return self.key_loader.resolve_private_key(application.authorization, application.id).key

    def _get_provider(self, settings: IntegrationSettings, url: str) -> JiraOAuth1Provider:
        """Create and configure a provider for one JIRA instance."""
        model = self.get_authorization_model(settings)

        provider = self.provider_factory()
        provider.configure(
            model.consumer_key,
            self._get_private_key(settings),
            url,
            self.get_callback_url(settings),
        )
        return provider

    async def is_user_authorized(
        self, settings: IntegrationSettings, url: str, user_id: int
    ) -> bool:
        """Verify if the user has authorized JIRA API calls on their behalf.

        Any /myself response other than 401 counts as authorized.

        Args:
            settings: JIRA integration settings
            url: JIRA base URL
            user_id: User ID on the messaging platform

        Returns:
            True if the user has authorized the access
        """
        record = await self.repository.find(
            settings.type, settings.configuration_id, url, user_id
        )

        if record is None or record.data is None:
            return False

        try:
            oauth1_data = JiraOAuth1Data.model_validate(record.data)
        except ValidationError as e:
            raise OAuth1Error("Invalid temporary token", stage="authorization_check") from e

        if not oauth1_data.is_authorized:
            return False

        myself_url = urljoin(_validate_service_url(url), MYSELF_PATH)

        provider = self._get_provider(settings, url)
        response = await provider.make_authorized_request(
            oauth1_data.access_token or "", myself_url, "GET"
        )

        if response.status_code == UNAUTHORIZED:
            logger.info("User %s is no longer authorized at %s", user_id, url)
            return False
        return True

    async def get_authorization_url(
        self, settings: IntegrationSettings, url: str, user_id: int
    ) -> str:
        """Start the OAuth flow for a user.

        Stores a record holding only the temporary token, replacing any
        previous record of the user for this JIRA instance.

        Returns:
            JIRA consent URL the user must visit
        """
        _validate_service_url(url)

        provider = self._get_provider(settings, url)

        temporary_token = await provider.request_temporary_token()
        authorization_url = provider.request_authorization_url(temporary_token)

        record = UserAuthorizationData.from_oauth1_data(
            url, user_id, JiraOAuth1Data(temporary_token=temporary_token)
        )
        await self.repository.save(settings.type, settings.configuration_id, record)

        logger.info("Authorization started for user %s at %s", user_id, url)
        return authorization_url

    async def authorize_temporary_token(
        self, settings: IntegrationSettings, temporary_token: str, verifier_code: str
    ) -> None:
        """Authorize a temporary token by getting an access token and saving it.

        Temporary tokens must be unique among in-flight authorizations; if
        several records match, the first one returned by the repository wins.

        Args:
            settings: JIRA integration settings
            temporary_token: Token used to get the authorization from the user
            verifier_code: Code JIRA created when the user granted access

        Raises:
            TokenNotFoundError: No in-flight authorization uses the token
        """
        result = await self.repository.search(
            settings.type,
            settings.configuration_id,
            {TEMPORARY_TOKEN_FILTER: temporary_token},
        )

        if not result:
            raise TokenNotFoundError(
                f"No authorization data found for temporary token {temporary_token}",
                temporary_token=temporary_token,
            )

        if len(result) > 1:
            logger.warning(
                "Temporary token matches %d authorization records, using the first", len(result)
            )
        record = result[0]

        provider = self._get_provider(settings, record.url)
        access_token = await provider.request_access_token(temporary_token, verifier_code)

        record.set_oauth1_data(
            JiraOAuth1Data(temporary_token=temporary_token, access_token=access_token)
        )
        await self.repository.save(settings.type, settings.configuration_id, record)

        logger.info("User %s authorized access to %s", record.user_id, record.url)
