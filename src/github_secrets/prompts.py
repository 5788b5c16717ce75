"""Interactive user prompts.

This module provides the questionary prompts used to pick repositories,
enter secrets, confirm overwrites and retries, and edit the config file.
InteractivePrompt bundles them for the app.
"""

from datetime import datetime, timezone

import click
import questionary
from questionary import Choice

from github_secrets import console
from github_secrets.config import Config
from github_secrets.models import Repository, SecretPair
from github_secrets.styles import POINTER, PROMPT_STYLE, QMARK
from github_secrets.validation import validate_repo_name, validate_repo_owner, validate_secret_key


def format_date(date_str: str, now: datetime | None = None) -> str:
    """Render an ISO 8601 timestamp relative to now.

    Args:
        date_str: Timestamp as returned by GitHub (e.g. ``2024-01-01T00:00:00Z``).
        now: Reference time, defaults to the current UTC time.

    Returns:
        "N days ago", "N hours ago", "N minutes ago" or "just now"; the
        input unchanged if it cannot be parsed.

    """
    try:
        parsed = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
    except ValueError:
        return date_str
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    elapsed = (now or datetime.now(timezone.utc)) - parsed
    seconds = int(elapsed.total_seconds())
    if elapsed.days > 0:
        return f"{elapsed.days} days ago"
    if seconds >= 3600:
        return f"{seconds // 3600} hours ago"
    if seconds >= 60:
        return f"{seconds // 60} minutes ago"
    return "just now"


async def select_repositories(repositories: list[Repository]) -> list[int]:
    """Let the user pick one or more repositories.

    A single configured repository is selected without asking.

    Args:
        repositories: Configured repositories.

    Returns:
        Indices of the selected repositories, in config order.

    """
    if len(repositories) == 1:
        console.info(f"Using repository: {console.highlight(repositories[0].display_name())}")
        return [0]

    selected: list[int] = await questionary.checkbox(
        "Select repositories to update",
        choices=[Choice(title=repo.display_name(), value=idx) for idx, repo in enumerate(repositories)],
        validate=lambda chosen: True if chosen else "Select at least one repository",
        style=PROMPT_STYLE,
        pointer=POINTER,
        qmark=QMARK,
    ).unsafe_ask_async()
    return sorted(selected)


def _validate_key_or_finish(key: str) -> bool | str:
    return True if not key.strip() else validate_secret_key(key)


async def prompt_secrets() -> list[SecretPair]:
    """Interactively collect secret key/value pairs.

    An empty key finishes entry. Entering a key twice replaces the earlier
    value and keeps its position.

    Returns:
        The collected secrets, possibly empty.

    """
    secrets: list[SecretPair] = []

    while True:
        if secrets:
            console.info(f"Current secrets: {console.highlight(str(len(secrets)))}")
            for idx, secret in enumerate(secrets, start=1):
                console.step(f"{idx}. {secret.key} = {console.mask(secret.value)}")

        key = await questionary.text(
            "Secret key (leave empty to finish)",
            validate=_validate_key_or_finish,
            style=PROMPT_STYLE,
            qmark=QMARK,
        ).unsafe_ask_async()
        key = key.strip()
        if not key:
            break

        value = await questionary.password(
            f"Value for {key}",
            validate=lambda v: True if v.strip() else "Value cannot be empty",
            style=PROMPT_STYLE,
            qmark=QMARK,
        ).unsafe_ask_async()

        pair = SecretPair(key=key, value=value)
        existing = next((idx for idx, secret in enumerate(secrets) if secret.key == key), None)
        if existing is None:
            secrets.append(pair)
            console.success(f"Secret {console.highlight(key)} added")
        else:
            secrets[existing] = pair
            console.success(f"Secret {console.highlight(key)} updated")

    return secrets


async def confirm_secret_update(secret_name: str, last_updated: str | None) -> bool:
    """Ask whether to overwrite an existing secret. Defaults to no."""
    message = f"Secret '{secret_name}' already exists"
    if last_updated:
        message += f" (last updated: {format_date(last_updated)})"
    message += ". Overwrite?"
    return await questionary.confirm(message, default=False, style=PROMPT_STYLE, qmark=QMARK).unsafe_ask_async()


async def confirm_retry() -> bool:
    """Ask whether to retry the failed operations. Defaults to no."""
    return await questionary.confirm(
        "Would you like to retry the failed operations?",
        default=False,
        style=PROMPT_STYLE,
        qmark=QMARK,
    ).unsafe_ask_async()


def _prompt_repository() -> Repository:
    owner = questionary.text(
        "Repository owner", validate=validate_repo_owner, style=PROMPT_STYLE, qmark=QMARK
    ).unsafe_ask()
    name = questionary.text(
        "Repository name", validate=validate_repo_name, style=PROMPT_STYLE, qmark=QMARK
    ).unsafe_ask()
    alias = questionary.text("Alias (optional)", style=PROMPT_STYLE, qmark=QMARK).unsafe_ask()
    return Repository(owner=owner.strip(), name=name.strip(), alias=alias.strip() or None)


def manage_config(initial: Config) -> Config | None:
    """Interactively add and remove configured repositories.

    Args:
        initial: The configuration to start from.

    Returns:
        The edited configuration, or None if the user cancelled.

    Raises:
        click.ClickException: If the user tries to save an empty configuration.

    """
    repositories = list(initial.repositories)

    while True:
        console.info(f"Configured repositories: {console.highlight(str(len(repositories)))}")
        for repo in repositories:
            console.step(f"{repo.alias} ({repo.path})" if repo.alias else repo.path)

        choice = questionary.select(
            "Edit configuration",
            choices=[
                {"name": "➕ Add repository", "value": "add"},
                {"name": "➖ Remove repository", "value": "remove", "disabled": not repositories},
                {"name": "💾 Save and exit", "value": "save"},
                {"name": "✗ Cancel", "value": "cancel"},
            ],
            style=PROMPT_STYLE,
            pointer=POINTER,
            qmark=QMARK,
        ).unsafe_ask()

        if choice == "cancel":
            return None
        if choice == "save":
            if not repositories:
                raise click.ClickException("Cannot save a configuration without repositories")
            return Config(repositories=repositories)
        if choice == "add":
            repo = _prompt_repository()
            if repo in repositories:
                console.warning(f"{console.highlight(repo.path)} is already configured")
            else:
                repositories.append(repo)
                console.success(f"Added {console.highlight(repo.path)}")
        else:
            index = questionary.select(
                "Select repository to remove",
                choices=[Choice(title=repo.display_name(), value=idx) for idx, repo in enumerate(repositories)],
                style=PROMPT_STYLE,
                pointer=POINTER,
                qmark=QMARK,
            ).unsafe_ask()
            removed = repositories.pop(index)
            console.success(f"Removed {console.highlight(removed.path)}")


class InteractivePrompt:
    """Terminal implementation of the app's prompt interface."""

    async def select_repositories(self, repositories: list[Repository]) -> list[int]:
        return await select_repositories(repositories)

    async def prompt_secrets(self) -> list[SecretPair]:
        return await prompt_secrets()

    async def confirm_secret_update(self, secret_name: str, last_updated: str | None) -> bool:
        return await confirm_secret_update(secret_name, last_updated)

    async def confirm_retry(self) -> bool:
        return await confirm_retry()

    def manage_config(self, initial: Config) -> Config | None:
        return manage_config(initial)
