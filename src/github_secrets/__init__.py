"""github-secrets: Interactive GitHub Actions secrets updater.

This package pushes secrets to the Actions secret store of one or more
GitHub repositories, asking before it overwrites an existing secret and
offering one retry of whatever failed.

Example usage:
    import asyncio

    from github_secrets import App, Config, Repository

    config = Config(repositories=[Repository(owner="my-org", name="backend")])
    asyncio.run(App.run_with_deps(factory, prompt, RateLimiter(), token, config))
"""

__version__ = "0.3.0"

from github_secrets.app import App
from github_secrets.cli import cli
from github_secrets.config import Config
from github_secrets.core.aggregator import ResultAggregator
from github_secrets.core.orchestrator import UpdateOrchestrator
from github_secrets.exceptions import (
    ClientCreationError,
    ConfigError,
    EncryptionError,
    GitHubApiError,
    GitHubSecretsError,
    TransportError,
    ValidationError,
)
from github_secrets.github.client import GitHubClientFactory, GitHubSecretsClient
from github_secrets.models import Repository, SecretMetadata, SecretPair, UpdateResult
from github_secrets.rate_limit import RateLimiter

__all__ = [
    # Version
    "__version__",
    # Main CLI
    "cli",
    # Classes
    "App",
    "Config",
    "GitHubClientFactory",
    "GitHubSecretsClient",
    "RateLimiter",
    "ResultAggregator",
    "UpdateOrchestrator",
    # Models
    "Repository",
    "SecretMetadata",
    "SecretPair",
    "UpdateResult",
    # Exceptions
    "GitHubSecretsError",
    "ClientCreationError",
    "ConfigError",
    "EncryptionError",
    "GitHubApiError",
    "TransportError",
    "ValidationError",
]
