"""Data models for github-secrets.

This module provides the value types passed between the configuration,
prompt, client and orchestration layers.
"""

from dataclasses import dataclass, field
from typing import NamedTuple

DECLINED_REASON = "User declined to overwrite"


@dataclass(frozen=True, slots=True)
class Repository:
    """A GitHub repository secrets can be pushed to.

    Identity is the ``(owner, name)`` pair; the alias is display-only.

    Attributes:
        owner: GitHub user or organization name.
        name: Repository name.
        alias: Optional friendly name shown instead of ``owner/name``.

    """

    owner: str
    name: str
    alias: str | None = field(default=None, compare=False)

    @property
    def path(self) -> str:
        """Return the ``owner/name`` form of the repository."""
        return f"{self.owner}/{self.name}"

    def display_name(self) -> str:
        """Return the alias if set, otherwise ``owner/name``."""
        return self.alias or self.path


@dataclass(frozen=True, slots=True)
class SecretPair:
    """A secret key and its plaintext value.

    The value is excluded from ``repr`` so it never leaks into debug output.
    """

    key: str
    value: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class SecretMetadata:
    """Metadata GitHub reports for an existing secret."""

    name: str
    updated_at: str | None = None
    created_at: str | None = None


class PublicKey(NamedTuple):
    """A repository's secret encryption key.

    Attributes:
        key_id: Identifier GitHub expects alongside the encrypted value.
        key: Base64 encoded Curve25519 public key.

    """

    key_id: str
    key: str


class UpdateTarget(NamedTuple):
    """One unit of orchestrator work: a secret bound for a repository."""

    repository: Repository
    secret: SecretPair


@dataclass(frozen=True, slots=True)
class UpdateResult:
    """Outcome of one attempt to write a secret to a repository.

    Attributes:
        secret_name: The secret key.
        repository: Display name of the target repository.
        success: Whether the secret was written.
        error: Failure reason, ``None`` on success.
        declined: True when the user chose not to overwrite an existing secret.

    """

    secret_name: str
    repository: str
    success: bool
    error: str | None = None
    declined: bool = False

    @classmethod
    def succeeded(cls, target: UpdateTarget) -> "UpdateResult":
        return cls(secret_name=target.secret.key, repository=target.repository.display_name(), success=True)

    @classmethod
    def failed(cls, target: UpdateTarget, error: str, *, declined: bool = False) -> "UpdateResult":
        return cls(
            secret_name=target.secret.key,
            repository=target.repository.display_name(),
            success=False,
            error=error,
            declined=declined,
        )
