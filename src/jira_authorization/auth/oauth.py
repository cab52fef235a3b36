"""OAuth 1.0a (RSA-SHA1) provider for JIRA."""

from __future__ import annotations

import base64
import logging
import secrets
import time
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

import httpx
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from jira_authorization.auth.keys import RsaKeyFactory
from jira_authorization.exceptions import KeyValidationError, OAuth1Error

if TYPE_CHECKING:
    from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

logger = logging.getLogger(__name__)

REQUEST_TOKEN_PATH = "/plugins/servlet/oauth/request-token"
AUTHORIZE_PATH = "/plugins/servlet/oauth/authorize"
ACCESS_TOKEN_PATH = "/plugins/servlet/oauth/access-token"

SIGNATURE_METHOD = "RSA-SHA1"
DEFAULT_TIMEOUT = 30.0


def _encode(value: str) -> str:
    """Percent-encode per RFC 5849 section 3.6."""
    return quote(value, safe="~")


def _normalize_url(url: str) -> tuple[str, list[tuple[str, str]]]:
    """Split a URL into its signature base URI and its query parameters."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    netloc = parts.netloc.lower()

    # Default ports are excluded from the base string
    if (scheme, parts.port) in (("http", 80), ("https", 443)):
        netloc = netloc.rsplit(":", 1)[0]

    base_uri = urlunsplit((scheme, netloc, parts.path or "/", "", ""))
    return base_uri, parse_qsl(parts.query, keep_blank_values=True)


class JiraOAuth1Provider:
    """OAuth 1.0a handler for the JIRA application link.

    Implements the three-legged flow with RSA-SHA1 signatures:
    1. Get a temporary (request) token
    2. User authorization (redirect to JIRA consent page)
    3. Exchange verifier for access token

    A provider must be configured before use. Create a fresh instance
    per call instead of sharing a configured one.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the provider.

        Args:
            http_client: Optional httpx.AsyncClient for connection pooling.
                        If provided, the provider uses it and does NOT close it.
            timeout: Timeout in seconds for per-request clients
        """
        self._http_client = http_client
        self.timeout = timeout
        self._consumer_key: str | None = None
        self._private_key: RSAPrivateKey | None = None
        self._base_url: str | None = None
        self._callback_url: str | None = None

    @property
    def is_configured(self) -> bool:
        return self._private_key is not None

    def configure(
        self,
        consumer_key: str | None,
        private_key: str | None,
        base_url: str,
        callback_url: str,
    ) -> None:
        """Bind signing identity and target JIRA instance.

        Args:
            consumer_key: Consumer key registered in the JIRA application link
            private_key: Base64 PKCS#8 private key (PEM markers stripped)
            base_url: JIRA base URL
            callback_url: URL JIRA redirects the user to after consent
        """
        if not consumer_key:
            raise OAuth1Error(
                "Consumer key is not configured",
                stage="configuration",
                solution="Set the consumer key of the application authorization settings.",
            )

        if not private_key:
            raise OAuth1Error(
                "Application private key is not available",
                stage="configuration",
                solution="Provision the application private key in the certificate directory.",
            )

        try:
            rsa_key = RsaKeyFactory.parse_private_key(private_key)
        except KeyValidationError as e:
            raise OAuth1Error(
                f"Cannot sign requests: {e.message}",
                stage="configuration",
                solution=e.solution,
            ) from e

        self._consumer_key = consumer_key
        self._private_key = rsa_key
        self._base_url = base_url.rstrip("/")
        self._callback_url = callback_url

    async def request_temporary_token(self) -> str:
        """Step 1: Get a temporary token to start the OAuth flow."""
        url = f"{self._get_base_url()}{REQUEST_TOKEN_PATH}"

        headers = self.sign_request(
            "POST", url, oauth_params={"oauth_callback": self._callback_url or "oob"}
        )
        response = await self._send("POST", url, headers=headers, stage="request_token")
        data = self._parse_token_response(response, stage="request_token")

        logger.debug("Temporary token obtained from %s", self._base_url)
        return data["oauth_token"]

    def request_authorization_url(self, temporary_token: str) -> str:
        """Step 2: Build the JIRA consent URL the user must visit."""
        query = urlencode(
            {"oauth_token": temporary_token, "oauth_callback": self._callback_url or "oob"}
        )
        return f"{self._get_base_url()}{AUTHORIZE_PATH}?{query}"

    async def request_access_token(self, temporary_token: str, verifier: str) -> str:
        """Step 3: Exchange the verifier code for a permanent access token.

        Args:
            temporary_token: Token returned by request_temporary_token
            verifier: Verification code JIRA sent to the callback URL

        Returns:
            Access token
        """
        url = f"{self._get_base_url()}{ACCESS_TOKEN_PATH}"

        headers = self.sign_request(
            "POST",
            url,
            token=temporary_token,
            oauth_params={"oauth_verifier": verifier},
        )
        response = await self._send("POST", url, headers=headers, stage="access_token")
        data = self._parse_token_response(response, stage="access_token")

        return data["oauth_token"]

    async def make_authorized_request(
        self,
        access_token: str,
        url: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a signed request on behalf of the user owning the access token.

        The response is returned as is, without checking its status code.
        """
        headers = self.sign_request(method, url, token=access_token)
        headers["Accept"] = "application/json"

        if body is not None:
            headers["Content-Type"] = "application/json"

        return await self._send(method, url, headers=headers, json_body=body, stage="request")

    def sign_request(
        self,
        method: str,
        url: str,
        *,
        token: str | None = None,
        oauth_params: dict[str, str] | None = None,
    ) -> dict[str, str]:
        """Generate OAuth headers for a request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            url: Full request URL, including query string
            token: Temporary or access token, if any
            oauth_params: Extra oauth_* parameters (callback, verifier)

        Returns:
            Headers dict with Authorization header
        """
        params = self._build_oauth_params()
        if token:
            params["oauth_token"] = token
        if oauth_params:
            params.update(oauth_params)

        params["oauth_signature"] = self._generate_signature(method, url, params)

        return {"Authorization": self._build_auth_header(params)}

    def _get_base_url(self) -> str:
        if self._base_url is None:
            raise OAuth1Error(
                "OAuth provider used before configure()",
                stage="configuration",
            )
        return self._base_url

    def _build_oauth_params(self) -> dict[str, str]:
        """Build base OAuth parameters."""
        if self._consumer_key is None:
            raise OAuth1Error("OAuth provider used before configure()", stage="configuration")

        return {
            "oauth_consumer_key": self._consumer_key,
            "oauth_nonce": secrets.token_hex(16),
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": str(int(time.time())),
            "oauth_version": "1.0",
        }

    def _generate_signature(self, method: str, url: str, oauth_params: dict[str, str]) -> str:
        """Generate OAuth 1.0a RSA-SHA1 signature."""
        if self._private_key is None:
            raise OAuth1Error("OAuth provider used before configure()", stage="configuration")

        base_uri, query_params = _normalize_url(url)

        # Sort and encode parameters (query string and oauth_* together)
        all_params = [(_encode(k), _encode(v)) for k, v in [*query_params, *oauth_params.items()]]
        param_string = "&".join(f"{k}={v}" for k, v in sorted(all_params))

        base_string = "&".join([method.upper(), _encode(base_uri), _encode(param_string)])

        signature = self._private_key.sign(
            base_string.encode(),
            padding.PKCS1v15(),
            hashes.SHA1(),
        )

        return base64.b64encode(signature).decode()

    def _build_auth_header(self, oauth_params: dict[str, str]) -> str:
        """Build OAuth Authorization header."""
        auth_parts = [f'{k}="{_encode(v)}"' for k, v in sorted(oauth_params.items())]
        return "OAuth " + ", ".join(auth_parts)

    async def _send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        stage: str,
        json_body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        logger.debug("Request: %s %s", method, url)

        try:
            if self._http_client is not None:
                return await self._http_client.request(
                    method, url, headers=headers, json=json_body
                )

            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.request(method, url, headers=headers, json=json_body)
        except httpx.TimeoutException as e:
            raise OAuth1Error(
                f"Request to {url} timed out",
                stage=stage,
                solution="Check that the JIRA instance is reachable and try again.",
            ) from e
        except httpx.HTTPError as e:
            raise OAuth1Error(
                f"Request to {url} failed: {e}",
                stage=stage,
                solution="Check the JIRA base URL and network connectivity.",
            ) from e

    @staticmethod
    def _parse_token_response(response: httpx.Response, *, stage: str) -> dict[str, str]:
        """Parse a form-encoded token response, raising on rejection."""
        data = dict(parse_qsl(response.text, keep_blank_values=True))

        if response.status_code != 200:
            problem = data.get("oauth_problem", response.text)
            raise OAuth1Error(
                f"JIRA rejected the {stage.replace('_', ' ')} request: "
                f"{response.status_code} {problem}",
                stage=stage,
                solution="Check the consumer key and the public key registered "
                "in the JIRA application link.",
            )

        if "oauth_problem" in data or not data.get("oauth_token"):
            raise OAuth1Error(
                f"Invalid {stage.replace('_', ' ')} response",
                stage=stage,
            )

        return data
