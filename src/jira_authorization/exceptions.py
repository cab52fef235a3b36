"""Typed exceptions for JIRA authorization."""


class JiraAuthorizationError(Exception):
    """Base exception for all JIRA authorization errors.

    Every error carries a machine-readable ``kind`` and an optional
    human-readable ``solution`` describing how to fix the problem.
    """

    kind = "authorization_error"

    def __init__(self, message: str, *, solution: str | None = None) -> None:
        self.message = message
        self.solution = solution
        super().__init__(message)


class KeyValidationError(JiraAuthorizationError):
    """Key file is present but does not hold a valid RSA key."""

    kind = "key_validation"

    def __init__(
        self,
        message: str,
        *,
        filename: str | None = None,
        solution: str | None = None,
    ) -> None:
        self.filename = filename
        super().__init__(
            message,
            solution=solution
            or "Regenerate the key pair and make sure the file holds a PEM encoded RSA key.",
        )


class OAuth1Error(JiraAuthorizationError):
    """OAuth 1.0a protocol error (rejected request, malformed response, timeout)."""

    kind = "oauth1"

    def __init__(
        self,
        message: str,
        *,
        stage: str | None = None,
        solution: str | None = None,
    ) -> None:
        self.stage = stage  # e.g., "request_token", "access_token", "request"
        super().__init__(message, solution=solution)


class InvalidServiceUrlError(OAuth1Error):
    """The JIRA base URL supplied by the caller is malformed."""

    kind = "invalid_service_url"

    def __init__(self, message: str, *, url: str, solution: str | None = None) -> None:
        self.url = url
        super().__init__(
            message,
            stage="url_validation",
            solution=solution
            or "Provide the JIRA base URL including scheme and host, e.g. https://jira.example.com",
        )


class TokenNotFoundError(OAuth1Error):
    """No in-flight authorization matches the temporary token."""

    kind = "token_not_found"

    def __init__(self, message: str, *, temporary_token: str) -> None:
        self.temporary_token = temporary_token
        super().__init__(
            message,
            stage="authorize",
            solution="The authorization attempt expired or was never started. "
            "Request a new authorization URL and try again.",
        )


class CertificateDirectoryNotFoundError(JiraAuthorizationError):
    """The host has no certificate directory provisioned."""

    kind = "certificate_directory_not_found"

    def __init__(self, message: str) -> None:
        super().__init__(
            message,
            solution="Create the certificate directory and configure its location.",
        )


class ApplicationNotFoundError(JiraAuthorizationError):
    """No application is configured for the integration type."""

    kind = "application_not_found"

    def __init__(self, message: str, *, app_type: str) -> None:
        self.app_type = app_type
        super().__init__(
            message,
            solution=f"Add an application entry for '{app_type}' to the configuration.",
        )


class JiraUnexpectedError(JiraAuthorizationError):
    """A JIRA call failed because of an unexpected error."""

    kind = "unexpected"

    def __init__(self, message: str, *, component: str) -> None:
        self.component = component
        super().__init__(message)
