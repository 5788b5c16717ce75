"""Input validation for secret keys, repositories and tokens.

Validators follow the questionary ``validate=`` convention: they return
``True`` for valid input or an error message string otherwise, so the same
functions drive interactive prompts and config-file checks.
"""

import re
from collections.abc import Callable

from github_secrets.exceptions import ValidationError

SECRET_KEY_MAX_LENGTH = 100
OWNER_MAX_LENGTH = 39
REPO_NAME_MAX_LENGTH = 100
TOKEN_MIN_LENGTH = 20
TOKEN_MAX_LENGTH = 200

_SECRET_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def validate_secret_key(key: str) -> bool | str:
    """Validate a GitHub Actions secret name.

    Args:
        key: The secret key to validate.

    Returns:
        True if valid, or an error message string if invalid.

    """
    trimmed = key.strip()
    if not trimmed:
        return "Secret key cannot be empty"
    if len(trimmed) > SECRET_KEY_MAX_LENGTH:
        return f"Secret key cannot exceed {SECRET_KEY_MAX_LENGTH} characters (got {len(trimmed)})"
    if not _SECRET_KEY_PATTERN.match(trimmed):
        return f"Secret key can only contain letters, numbers, underscores, and hyphens. Got: '{trimmed}'"
    return True


def validate_repo_owner(owner: str) -> bool | str:
    """Validate a repository owner (user or organization) name."""
    trimmed = owner.strip()
    if not trimmed:
        return "Repository owner cannot be empty"
    if len(trimmed) > OWNER_MAX_LENGTH:
        return f"Repository owner cannot exceed {OWNER_MAX_LENGTH} characters (got {len(trimmed)})"
    return True


def validate_repo_name(name: str) -> bool | str:
    """Validate a repository name."""
    trimmed = name.strip()
    if not trimmed:
        return "Repository name cannot be empty"
    if len(trimmed) > REPO_NAME_MAX_LENGTH:
        return f"Repository name cannot exceed {REPO_NAME_MAX_LENGTH} characters (got {len(trimmed)})"
    return True


def validate_token(token: str) -> bool | str:
    """Sanity-check a GitHub token's length.

    Only the shape is checked; GitHub itself decides whether it is valid.
    """
    trimmed = token.strip()
    if not trimmed:
        return "GitHub token cannot be empty"
    if len(trimmed) < TOKEN_MIN_LENGTH:
        return f"GitHub token appears too short (minimum {TOKEN_MIN_LENGTH} characters)"
    if len(trimmed) > TOKEN_MAX_LENGTH:
        return f"GitHub token appears too long (maximum {TOKEN_MAX_LENGTH} characters)"
    return True


def ensure_valid(validator: Callable[[str], bool | str], value: str) -> str:
    """Run a validator and raise on failure.

    Args:
        validator: One of the ``validate_*`` functions.
        value: The value to check.

    Returns:
        The value with surrounding whitespace removed.

    Raises:
        ValidationError: If the validator returned an error message.

    """
    result = validator(value)
    if result is not True:
        raise ValidationError(str(result))
    return value.strip()
