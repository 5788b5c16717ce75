"""Configuration loading for github-secrets.

This module locates and parses the YAML file listing the repositories
secrets can be pushed to, loads ``.env`` files, and reads the GitHub token
from the environment.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from icecream import ic

from github_secrets.exceptions import ConfigError, ValidationError
from github_secrets.models import Repository
from github_secrets.validation import ensure_valid, validate_repo_name, validate_repo_owner, validate_token

APP_NAME = "github-secrets"
CONFIG_FILE_NAME = "config.yaml"
ENV_FILE_NAME = ".env"
TOKEN_ENV_VAR = "GITHUB_TOKEN"


@dataclass
class Config:
    """Parsed configuration file.

    Attributes:
        repositories: Repositories secrets can be pushed to, in file order.

    """

    repositories: list[Repository] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        entries: list[dict[str, str]] = []
        for repo in self.repositories:
            entry = {"owner": repo.owner, "name": repo.name}
            if repo.alias:
                entry["alias"] = repo.alias
            entries.append(entry)
        return {"repositories": entries}


def default_config_dir() -> Path:
    """Return ``~/.config/github-secrets``."""
    return Path.home() / ".config" / APP_NAME


def _xdg_config_dir() -> Path | None:
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg_config_home) / APP_NAME if xdg_config_home else None


def find_config_file() -> Path:
    """Locate the configuration file.

    Checked in order: ``$CONFIG_PATH``, ``./config.yaml``,
    ``~/.config/github-secrets/config.yaml`` and
    ``$XDG_CONFIG_HOME/github-secrets/config.yaml``.

    Returns:
        The first existing candidate, or the default location if none exists.

    """
    candidates: list[Path] = []
    if config_path := os.environ.get("CONFIG_PATH"):
        candidates.append(Path(config_path))
    candidates.append(Path(CONFIG_FILE_NAME))
    candidates.append(default_config_dir() / CONFIG_FILE_NAME)
    if xdg_dir := _xdg_config_dir():
        candidates.append(xdg_dir / CONFIG_FILE_NAME)

    for candidate in candidates:
        if candidate.is_file():
            ic(candidate)
            return candidate

    return default_config_dir() / CONFIG_FILE_NAME


def load_env_file() -> Path | None:
    """Load a ``.env`` file into the environment.

    The current directory wins over the config directories. Variables that
    are already set are left untouched.

    Returns:
        The loaded file, or None if no ``.env`` file was found.

    """
    candidates = [Path(ENV_FILE_NAME), default_config_dir() / ENV_FILE_NAME]
    if xdg_dir := _xdg_config_dir():
        candidates.append(xdg_dir / ENV_FILE_NAME)

    for candidate in candidates:
        if candidate.is_file():
            ic(candidate)
            load_dotenv(candidate, override=False)
            return candidate
    return None


def _parse_repository(entry: Any, index: int) -> Repository:
    if not isinstance(entry, dict):
        raise ConfigError(f"Repository #{index} must be a mapping with 'owner' and 'name'")

    owner = str(entry.get("owner") or "")
    name = str(entry.get("name") or "")
    alias = entry.get("alias")

    try:
        owner = ensure_valid(validate_repo_owner, owner)
    except ValidationError as err:
        raise ConfigError(f"Invalid owner in repository #{index}: {err}") from err
    try:
        name = ensure_valid(validate_repo_name, name)
    except ValidationError as err:
        raise ConfigError(f"Invalid repository name in repository #{index}: {err}") from err

    return Repository(owner=owner, name=name, alias=str(alias) if alias else None)


def parse_config(data: Any, *, allow_empty: bool = False) -> Config:
    """Build a Config from an already-parsed YAML document.

    Both ``repositories: [...]`` and a single ``repository: {...}`` are
    accepted; the list form wins when both are present.

    Raises:
        ConfigError: If no repositories are defined or an entry is invalid.

    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a YAML mapping")

    entries = data.get("repositories") or []
    if not isinstance(entries, list):
        raise ConfigError("'repositories' must be a list")
    if not entries and data.get("repository"):
        entries = [data["repository"]]

    if not entries and not allow_empty:
        raise ConfigError("No repositories found in config file")

    return Config(repositories=[_parse_repository(entry, idx) for idx, entry in enumerate(entries, start=1)])


def load_config(path: Path | str, *, allow_empty: bool = False) -> Config:
    """Read and validate a configuration file.

    Args:
        path: Path to the YAML config file.
        allow_empty: Accept a file without repositories (used when editing).

    Raises:
        ConfigError: If the file is missing, malformed, or invalid.

    """
    try:
        with open(path) as stream:
            data = yaml.safe_load(stream)
    except FileNotFoundError as err:
        raise ConfigError(f"Failed to read config file: {path} does not exist") from err
    except yaml.YAMLError as err:
        raise ConfigError(f"Failed to parse config file {path}: {err}") from err

    return parse_config(data, allow_empty=allow_empty)


def save_config(config: Config, path: Path | str) -> None:
    """Write the configuration to ``path``, creating parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w") as stream:
        yaml.safe_dump(config.to_dict(), stream, sort_keys=False)


def get_token() -> str:
    """Return the GitHub token from the environment.

    Raises:
        ConfigError: If ``GITHUB_TOKEN`` is unset or malformed.

    """
    token = os.environ.get(TOKEN_ENV_VAR, "")
    try:
        return ensure_valid(validate_token, token)
    except ValidationError as err:
        raise ConfigError(f"Invalid GitHub token format: {err}") from err
