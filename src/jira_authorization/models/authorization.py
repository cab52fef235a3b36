"""Authorization models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PUBLIC_KEY_FILENAME = "publicKeyFilename"
PRIVATE_KEY_FILENAME = "privateKeyFilename"
CONSUMER_KEY = "consumerKey"


class AppAuthorizationModel(BaseModel):
    """Static authorization settings of one application, as configured."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    application_name: str | None = Field(
        default=None, alias="applicationName", description="Name shown to JIRA admins"
    )
    application_url: str | None = Field(
        default=None, alias="applicationURL", description="Application URL registered in JIRA"
    )
    consumer_key: str | None = Field(default=None, alias="consumerKey")
    public_key_filename: str | None = Field(default=None, alias="publicKeyFilename")
    private_key_filename: str | None = Field(default=None, alias="privateKeyFilename")
    properties: dict[str, Any] = Field(default_factory=dict)

    def _property(self, name: str) -> str | None:
        value = self.properties.get(name)
        return str(value) if value else None

    def get_consumer_key(self) -> str | None:
        """Consumer key from the typed field, falling back to the property bag."""
        return self.consumer_key or self._property(CONSUMER_KEY)

    def get_public_key_filename(self) -> str | None:
        """Public key filename override, if any."""
        return self.public_key_filename or self._property(PUBLIC_KEY_FILENAME)

    def get_private_key_filename(self) -> str | None:
        """Private key filename override, if any."""
        return self.private_key_filename or self._property(PRIVATE_KEY_FILENAME)


class ResolvedAuthorizationModel(BaseModel):
    """Authorization settings together with the key material found on disk."""

    model_config = ConfigDict(frozen=True)

    application_id: str
    consumer_key: str | None
    public_key: str | None = Field(
        default=None, description="Public key body (PEM markers stripped) or None if absent"
    )
    authorization: AppAuthorizationModel


class JiraOAuth1Data(BaseModel):
    """Progress of one user through the OAuth 1.0a flow."""

    model_config = ConfigDict(populate_by_name=True)

    temporary_token: str = Field(alias="temporaryToken")
    access_token: str | None = Field(default=None, alias="accessToken")

    @property
    def is_authorized(self) -> bool:
        """True once an access token was obtained."""
        return bool(self.access_token)


class UserAuthorizationData(BaseModel):
    """Persisted authorization record of one user for one JIRA instance."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(description="JIRA base URL")
    user_id: int = Field(alias="userId")
    data: dict[str, Any] | None = Field(
        default=None, description="Serialized JiraOAuth1Data payload"
    )

    @classmethod
    def from_oauth1_data(
        cls, url: str, user_id: int, oauth1_data: JiraOAuth1Data
    ) -> UserAuthorizationData:
        """Build a record wrapping the given OAuth 1.0a state."""
        record = cls(url=url, user_id=user_id)
        record.set_oauth1_data(oauth1_data)
        return record

    def set_oauth1_data(self, oauth1_data: JiraOAuth1Data) -> None:
        """Replace the stored payload."""
        self.data = oauth1_data.model_dump(by_alias=True)
