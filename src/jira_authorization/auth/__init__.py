"""OAuth 1.0a authorization for JIRA."""

from jira_authorization.auth.keys import KeyMaterial, KeyMaterialLoader, RsaKeyFactory
from jira_authorization.auth.oauth import JiraOAuth1Provider

__all__ = ["JiraOAuth1Provider", "KeyMaterial", "KeyMaterialLoader", "RsaKeyFactory"]
