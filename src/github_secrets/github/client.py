"""GitHub Actions secrets REST client.

This module provides the GitHubSecretsClient class, bound to a single
repository, and the GitHubClientFactory that the update orchestrator uses
to build one client per selected repository.
"""

import asyncio
from typing import Any

import requests
from icecream import ic

from github_secrets.exceptions import ClientCreationError, GitHubApiError, TransportError
from github_secrets.github.encryption import encrypt_secret
from github_secrets.models import PublicKey, SecretMetadata

API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
REQUEST_TIMEOUT = 30


class GitHubSecretsClient:
    """Reads and writes Actions secrets of one repository.

    Blocking ``requests`` calls run in a worker thread via
    :func:`asyncio.to_thread`, so callers await them like any other I/O.

    Attributes:
        owner: Repository owner.
        repo: Repository name.
        base_url: GitHub API root.

    """

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        *,
        base_url: str = API_URL,
        session: requests.Session | None = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
            }
        )

    def __repr__(self) -> str:
        return f"GitHubSecretsClient(owner={self.owner!r}, repo={self.repo!r}, base_url={self.base_url!r})"

    @property
    def _secrets_url(self) -> str:
        return f"{self.base_url}/repos/{self.owner}/{self.repo}/actions/secrets"

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        ic(method, url)
        try:
            response = self.session.request(method, url, timeout=REQUEST_TIMEOUT, **kwargs)
        except requests.RequestException as err:
            raise TransportError(f"HTTP error: {err}") from err
        ic(response.status_code)
        return response

    @staticmethod
    def _api_error(response: requests.Response) -> GitHubApiError:
        """Build a GitHubApiError from an error response, keeping every detail GitHub sent."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            return GitHubApiError(
                status_code=response.status_code,
                message=str(body.get("message") or response.reason or "Unknown error"),
                documentation_url=body.get("documentation_url"),
                errors=body.get("errors"),
            )
        return GitHubApiError(
            status_code=response.status_code,
            message=response.text.strip() or response.reason or "Unknown error",
        )

    def _get_public_key(self) -> PublicKey:
        response = self._request("GET", f"{self._secrets_url}/public-key")
        if not response.ok:
            raise self._api_error(response)
        try:
            data = response.json()
            return PublicKey(key_id=str(data["key_id"]), key=data["key"])
        except (ValueError, KeyError, TypeError) as err:
            raise TransportError(f"Unexpected public key response: {err}") from err

    def _get_secret_info(self, secret_name: str) -> SecretMetadata | None:
        response = self._request("GET", f"{self._secrets_url}/{secret_name}")
        if response.status_code == 404:
            return None
        if not response.ok:
            raise self._api_error(response)
        try:
            data = response.json()
        except ValueError as err:
            raise TransportError(f"Unexpected secret info response: {err}") from err
        if not isinstance(data, dict):
            raise TransportError(f"Unexpected secret info response: expected an object, got {type(data).__name__}")
        return SecretMetadata(
            name=data.get("name", secret_name),
            updated_at=data.get("updated_at"),
            created_at=data.get("created_at"),
        )

    def _update_secret(self, secret_name: str, secret_value: str) -> None:
        public_key = self._get_public_key()
        payload = {
            "encrypted_value": encrypt_secret(public_key.key, secret_value),
            "key_id": public_key.key_id,
        }
        response = self._request("PUT", f"{self._secrets_url}/{secret_name}", json=payload)
        if not response.ok:
            raise self._api_error(response)

        # 201 Created / 204 No Content come back with an empty body
        if response.content.strip():
            try:
                response.json()
            except ValueError as err:
                raise TransportError(f"JSON parsing error: {err}") from err

    async def get_public_key(self) -> PublicKey:
        """Fetch the key used to encrypt this repository's secrets.

        Raises:
            GitHubApiError: If GitHub answers with a non-2xx status.
            TransportError: If the request fails or the body is malformed.

        """
        return await asyncio.to_thread(self._get_public_key)

    async def get_secret_info(self, secret_name: str) -> SecretMetadata | None:
        """Look up an existing secret.

        Args:
            secret_name: The secret key.

        Returns:
            The secret's metadata, or None if the secret does not exist.

        Raises:
            GitHubApiError: For any non-2xx status other than 404.
            TransportError: If the request fails.

        """
        return await asyncio.to_thread(self._get_secret_info, secret_name)

    async def update_secret(self, secret_name: str, secret_value: str) -> None:
        """Create or overwrite a secret.

        Fetches the repository public key, seals the value with it and
        uploads the ciphertext.

        Args:
            secret_name: The secret key.
            secret_value: The plaintext value.

        Raises:
            GitHubApiError: If GitHub answers with a non-2xx status.
            TransportError: If the request fails or a non-empty body is not JSON.
            EncryptionError: If the public key cannot be used.

        """
        await asyncio.to_thread(self._update_secret, secret_name, secret_value)


class GitHubClientFactory:
    """Builds a GitHubSecretsClient per repository."""

    def __init__(self, *, base_url: str = API_URL) -> None:
        self.base_url = base_url

    def create(self, token: str, owner: str, repo: str) -> GitHubSecretsClient:
        """Create a client for ``owner/repo``.

        Raises:
            ClientCreationError: If the token, owner or repo is empty.

        """
        if not token or not token.strip():
            raise ClientCreationError("Failed to create GitHub client: token is empty")
        if not owner.strip() or not repo.strip():
            raise ClientCreationError(f"Failed to create GitHub client: invalid repository '{owner}/{repo}'")
        return GitHubSecretsClient(token.strip(), owner.strip(), repo.strip(), base_url=self.base_url)
