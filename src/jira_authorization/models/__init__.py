"""Pydantic models for JIRA authorization."""

from jira_authorization.models.authorization import (
    CONSUMER_KEY,
    PRIVATE_KEY_FILENAME,
    PUBLIC_KEY_FILENAME,
    AppAuthorizationModel,
    JiraOAuth1Data,
    ResolvedAuthorizationModel,
    UserAuthorizationData,
)

__all__ = [
    # Property bag keys
    "CONSUMER_KEY",
    "PRIVATE_KEY_FILENAME",
    "PUBLIC_KEY_FILENAME",
    # Models
    "AppAuthorizationModel",
    "JiraOAuth1Data",
    "ResolvedAuthorizationModel",
    "UserAuthorizationData",
]
