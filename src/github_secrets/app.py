"""Application facade.

This module provides the App class, which wires configuration, prompts,
the GitHub client factory, the rate limiter, the orchestrator and the
aggregator into one run.
"""

import asyncio
from pathlib import Path

from icecream import ic

from github_secrets import console, report
from github_secrets.config import Config, find_config_file, get_token, load_config, load_env_file, save_config
from github_secrets.core.aggregator import ResultAggregator
from github_secrets.core.interfaces import ClientFactory, Limiter, PromptInterface
from github_secrets.core.orchestrator import UpdateOrchestrator, build_targets
from github_secrets.github.client import GitHubClientFactory
from github_secrets.prompts import InteractivePrompt
from github_secrets.rate_limit import RateLimiter


class App:
    """Entry points for a secrets update run and for config editing."""

    @staticmethod
    def run(*, config_path: str | None = None, retry_declined: bool = False) -> ResultAggregator | None:
        """Run an interactive update with the production collaborators.

        Args:
            config_path: Config file to use instead of the discovered one.
            retry_declined: Also offer to retry pairs the user declined to overwrite.

        Raises:
            ConfigError: If the token or the config file is invalid.

        """
        load_env_file()
        token = get_token()
        path = Path(config_path) if config_path else find_config_file()
        ic(path)
        config = load_config(path)

        return asyncio.run(
            App.run_with_deps(
                GitHubClientFactory(),
                InteractivePrompt(),
                RateLimiter(),
                token,
                config,
                retry_declined=retry_declined,
            )
        )

    @staticmethod
    async def run_with_deps(
        factory: ClientFactory,
        prompt: PromptInterface,
        rate_limiter: Limiter,
        token: str,
        config: Config,
        *,
        retry_declined: bool = False,
    ) -> ResultAggregator | None:
        """Run an update with injected collaborators.

        Returns:
            The aggregator holding the final results, or None if no
            secrets were entered.

        """
        repositories = config.repositories
        selected = [repositories[idx] for idx in await prompt.select_repositories(repositories)]

        secrets = await prompt.prompt_secrets()
        if not secrets:
            console.warning("No secrets to update.")
            return None

        console.newline()
        console.action(
            f"Processing {console.highlight(str(len(secrets)))} secret(s) across "
            f"{console.highlight(str(len(selected)))} repository/repositories..."
        )

        orchestrator = UpdateOrchestrator(
            token=token,
            client_factory=factory,
            oracle=prompt,
            rate_limiter=rate_limiter,
        )
        aggregator = ResultAggregator(orchestrator, prompt, retry_declined=retry_declined)

        results = await orchestrator.run(selected, secrets)
        aggregator.record(build_targets(selected, secrets), results)
        report.print_report(aggregator.results)

        if await aggregator.retry_failed():
            report.print_summary(aggregator.results, title="Final Summary")
            report.print_failures(aggregator.results)

        return aggregator

    @staticmethod
    def configure(*, config_path: str | None = None) -> bool:
        """Edit the config file interactively with the terminal prompts."""
        path = Path(config_path) if config_path else find_config_file()
        return App.configure_with_deps(InteractivePrompt(), path)

    @staticmethod
    def configure_with_deps(prompt: PromptInterface, config_path: Path) -> bool:
        """Edit the config at ``config_path`` and save it unless cancelled.

        A missing file starts from an empty configuration.

        Returns:
            True if the configuration was saved.

        Raises:
            ConfigError: If an existing file cannot be parsed.

        """
        initial = load_config(config_path, allow_empty=True) if config_path.is_file() else Config()
        console.info(f"Editing {console.highlight(str(config_path))}")

        updated = prompt.manage_config(initial)
        if updated is None:
            console.warning("Configuration unchanged")
            return False

        save_config(updated, config_path)
        console.success(f"Saved {console.highlight(str(config_path))}")
        return True
