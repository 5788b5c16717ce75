"""Shared test fixtures for github-secrets tests."""

import base64

import pytest
from fakes import FakeLimiter
from nacl.public import PrivateKey

from github_secrets.models import Repository


@pytest.fixture
def repo_a():
    """First test repository."""
    return Repository(owner="acme", name="repo-a")


@pytest.fixture
def repo_b():
    """Second test repository, with an alias."""
    return Repository(owner="acme", name="repo-b", alias="Backend")


@pytest.fixture
def fake_limiter():
    """Non-blocking limiter double."""
    return FakeLimiter()


@pytest.fixture
def keypair():
    """Curve25519 keypair with the public half base64 encoded like GitHub returns it."""
    private_key = PrivateKey.generate()
    public_b64 = base64.b64encode(bytes(private_key.public_key)).decode()
    return private_key, public_b64


@pytest.fixture
def sample_config_yaml():
    """Sample config file content."""
    return """repositories:
  - owner: acme
    name: repo-a
  - owner: acme
    name: repo-b
    alias: Backend
"""


@pytest.fixture
def github_token():
    """A token long enough to pass validation."""
    return "ghp_" + "x" * 36
