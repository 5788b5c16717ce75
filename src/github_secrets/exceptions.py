"""Custom exceptions for github-secrets.

This module defines the exception hierarchy used throughout the application.
Per-secret failures raised by the GitHub client are caught by the update
orchestrator and recorded; configuration errors abort the run.
"""


class GitHubSecretsError(Exception):
    """Base exception for all github-secrets errors.

    The orchestrator catches this class around every API call, so any
    error that should be recorded as a per-secret failure must inherit it.
    """

    pass


class ConfigError(GitHubSecretsError):
    """Raised when the configuration cannot be used.

    This can occur when:
    - The config file is missing or not valid YAML
    - The config file lists no repositories
    - A repository entry has an invalid owner or name
    - The GitHub token is missing or malformed
    """

    pass


class ValidationError(GitHubSecretsError):
    """Raised when a value fails one of the input validators."""

    pass


class GitHubApiError(GitHubSecretsError):
    """Raised when the GitHub API answers with a non-2xx status.

    Attributes:
        status_code: HTTP status code returned by GitHub.
        message: The ``message`` field of the error body (or the raw body).
        documentation_url: Link to the relevant GitHub docs, when provided.
        errors: Detailed validation errors, when provided.

    """

    def __init__(
        self,
        status_code: int,
        message: str,
        documentation_url: str | None = None,
        errors: list | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.documentation_url = documentation_url
        self.errors = errors or []
        super().__init__(self._format())

    def _format(self) -> str:
        text = f"GitHub API error (status {self.status_code}): {self.message}"
        if self.errors:
            text += f" Details: {self.errors}"
        if self.documentation_url:
            text += f" Documentation: {self.documentation_url}"
        return text


class TransportError(GitHubSecretsError):
    """Raised when the GitHub API cannot be reached.

    This can occur when:
    - DNS resolution or the TCP/TLS connection fails
    - The request times out
    - A 2xx response carries a body that is not valid JSON
    """

    pass


class EncryptionError(GitHubSecretsError):
    """Raised when a secret value cannot be sealed with the repository key."""

    pass


class ClientCreationError(GitHubSecretsError):
    """Raised when a client cannot be built for a repository.

    The orchestrator treats this as fatal for the whole repository batch:
    every requested secret for that repository is recorded as failed.
    """

    pass
