"""Collaborator contracts for the update pipeline.

The orchestrator, aggregator and app only depend on these protocols, so
tests can substitute in-memory doubles for GitHub, the terminal and the
rate limiter.
"""

from typing import Protocol

from github_secrets.config import Config
from github_secrets.models import Repository, SecretMetadata, SecretPair


class SecretService(Protocol):
    """Secret operations against one repository."""

    async def get_secret_info(self, secret_name: str) -> SecretMetadata | None: ...

    async def update_secret(self, secret_name: str, secret_value: str) -> None: ...


class ClientFactory(Protocol):
    """Builds a SecretService for a repository.

    Any GitHubSecretsError raised here fails every pair of that repository.
    """

    def create(self, token: str, owner: str, repo: str) -> SecretService: ...


class ConfirmationOracle(Protocol):
    """Yes/no decisions taken while the pipeline runs."""

    async def confirm_secret_update(self, secret_name: str, last_updated: str | None) -> bool: ...

    async def confirm_retry(self) -> bool: ...


class Limiter(Protocol):
    async def acquire(self) -> None: ...

    def release(self) -> None: ...


class PromptInterface(ConfirmationOracle, Protocol):
    """Everything the app asks the user for.

    Prompts asked while the update pipeline runs are coroutines; the config
    editor runs before any event loop starts.
    """

    async def select_repositories(self, repositories: list[Repository]) -> list[int]: ...

    async def prompt_secrets(self) -> list[SecretPair]: ...

    def manage_config(self, initial: Config) -> Config | None: ...
