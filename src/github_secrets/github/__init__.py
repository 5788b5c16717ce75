"""GitHub API subpackage.

This package contains the REST client for Actions secrets and the
sealed-box encryption helper it relies on.
"""

from github_secrets.github.client import GitHubClientFactory, GitHubSecretsClient
from github_secrets.github.encryption import encrypt_secret

__all__ = [
    "GitHubClientFactory",
    "GitHubSecretsClient",
    "encrypt_secret",
]
