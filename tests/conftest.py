"""
Pytest configuration and fixtures for TapHeir tests.
"""

import os

import pytest

from crypto.keys import PrivateKey


# Private keys 1, 2 and 3 give the generator multiples G, 2G and 3G
OWNER_SECRET = (1).to_bytes(32, 'big')
HEIR_SECRET = (2).to_bytes(32, 'big')
ORACLE_SECRET = (3).to_bytes(32, 'big')


@pytest.fixture
def owner_key():
    return PrivateKey(OWNER_SECRET)


@pytest.fixture
def heir_key():
    return PrivateKey(HEIR_SECRET)


@pytest.fixture
def oracle_key():
    return PrivateKey(ORACLE_SECRET)


@pytest.fixture
def trust_keys(owner_key, heir_key, oracle_key):
    """x-only public keys of owner, heir and oracle."""
    return owner_key.x_only, heir_key.x_only, oracle_key.x_only


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with no config files or TAPHEIR_ environment variables in scope."""
    import cli.config

    monkeypatch.setattr(cli.config, 'CONFIG_SEARCH_PATHS', [tmp_path / '.tapheir.yml'])
    for key in list(os.environ):
        if key.startswith(cli.config.ENV_PREFIX):
            monkeypatch.delenv(key)
    return tmp_path
