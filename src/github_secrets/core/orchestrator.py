"""Secret update orchestration.

This module provides the UpdateOrchestrator, which walks the selected
repositories and requested secrets in order, checks whether each secret
already exists, asks before overwriting, and writes the secret under the
rate limiter. Every (repository, secret) pair yields exactly one
UpdateResult per pass; failures never stop the pass.
"""

from icecream import ic
from rich.markup import escape

from github_secrets import console
from github_secrets.core.interfaces import ClientFactory, ConfirmationOracle, Limiter, SecretService
from github_secrets.exceptions import GitHubSecretsError
from github_secrets.models import DECLINED_REASON, Repository, SecretPair, UpdateResult, UpdateTarget


def build_targets(repositories: list[Repository], secrets: list[SecretPair]) -> list[UpdateTarget]:
    """Return every (repository, secret) pair, repositories outermost."""
    return [UpdateTarget(repository, secret) for repository in repositories for secret in secrets]


class UpdateOrchestrator:
    """Pushes secrets to repositories one pair at a time.

    Pairs are processed sequentially so overwrite prompts never interleave.

    Attributes:
        token: GitHub token handed to the client factory.
        client_factory: Builds a SecretService per repository.
        oracle: Answers overwrite confirmations.
        rate_limiter: Held around each pair's API calls.

    """

    def __init__(
        self,
        *,
        token: str,
        client_factory: ClientFactory,
        oracle: ConfirmationOracle,
        rate_limiter: Limiter,
    ) -> None:
        self.token = token
        self.client_factory = client_factory
        self.oracle = oracle
        self.rate_limiter = rate_limiter

    def __repr__(self) -> str:
        return f"UpdateOrchestrator(client_factory={self.client_factory!r}, rate_limiter={self.rate_limiter!r})"

    async def run(self, repositories: list[Repository], secrets: list[SecretPair]) -> list[UpdateResult]:
        """Push every secret to every repository.

        Args:
            repositories: Selected repositories, in processing order.
            secrets: Secrets to push, in processing order.

        Returns:
            One UpdateResult per pair, in processing order. Empty when
            ``secrets`` is empty.

        """
        return await self.process(build_targets(repositories, secrets), check_existing=True)

    async def process(self, targets: list[UpdateTarget], *, check_existing: bool) -> list[UpdateResult]:
        """Process an explicit list of pairs.

        Args:
            targets: Pairs to process, in order.
            check_existing: When False the existence check and overwrite
                confirmation are skipped and the secret is written directly.
                Used by the retry pass, where intent was already confirmed.

        Returns:
            One UpdateResult per target, aligned with ``targets``.

        """
        results: list[UpdateResult] = []
        clients: dict[Repository, SecretService | GitHubSecretsError] = {}
        current: Repository | None = None

        for target in targets:
            repository = target.repository
            if repository != current:
                current = repository
                console.heading(f"Repository: {repository.display_name()}")

            if repository not in clients:
                clients[repository] = self._create_client(repository)
            client = clients[repository]

            if isinstance(client, GitHubSecretsError):
                console.error(
                    f"Skipping secret {console.highlight(target.secret.key)}: {escape(str(client))}"
                )
                results.append(UpdateResult.failed(target, str(client)))
                continue

            results.append(await self._process_target(client, target, check_existing=check_existing))

        return results

    def _create_client(self, repository: Repository) -> SecretService | GitHubSecretsError:
        try:
            return self.client_factory.create(self.token, repository.owner, repository.name)
        except GitHubSecretsError as err:
            console.error(
                f"Failed to initialize GitHub client for {console.highlight(repository.path)}: {escape(str(err))}"
            )
            return err

    async def _process_target(
        self, client: SecretService, target: UpdateTarget, *, check_existing: bool
    ) -> UpdateResult:
        key = target.secret.key
        repo_display = target.repository.display_name()
        ic(key, repo_display, check_existing)

        await self.rate_limiter.acquire()
        try:
            if check_existing:
                try:
                    metadata = await client.get_secret_info(key)
                except GitHubSecretsError as err:
                    console.error(
                        f"Failed to check secret {console.highlight(key)} in {escape(repo_display)}: {escape(str(err))}"
                    )
                    return UpdateResult.failed(target, f"Failed to check if secret exists: {err}")

                if metadata is not None and not await self.oracle.confirm_secret_update(key, metadata.updated_at):
                    console.warning(f"Skipping secret {console.highlight(key)} in {escape(repo_display)}")
                    return UpdateResult.failed(target, DECLINED_REASON, declined=True)

            try:
                await client.update_secret(key, target.secret.value)
            except GitHubSecretsError as err:
                console.error(
                    f"Failed to update secret {console.highlight(key)} in {escape(repo_display)}: {escape(str(err))}"
                )
                return UpdateResult.failed(target, str(err))
        finally:
            self.rate_limiter.release()

        console.success(f"Updated secret {console.highlight(key)} in {escape(repo_display)}")
        return UpdateResult.succeeded(target)
