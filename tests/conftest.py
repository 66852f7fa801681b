"""
Shared pytest fixtures.
"""

import time

import pytest
from fastapi.testclient import TestClient

from authservice.auth import AccountService, PasswordHasher, SessionManager
from authservice.config import Settings
from authservice.db import InMemoryUserStore
from authservice.main import create_app

TEST_SECRET = "test-secret-not-for-production"


@pytest.fixture
def test_settings():
    """Settings that ignore the environment and hash fast."""
    return Settings(
        _env_file=None,
        session_secret=TEST_SECRET,
        environment="development",
        bcrypt_rounds=4,
        log_level="DEBUG",
    )


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def session_manager():
    return SessionManager(TEST_SECRET)


@pytest.fixture
def accounts(store, hasher, session_manager):
    return AccountService(store=store, hasher=hasher, session_manager=session_manager)


@pytest.fixture
def past_session_manager():
    """Issues tokens as if it were two days ago."""
    return SessionManager(TEST_SECRET, clock=lambda: time.time() - 2 * 24 * 60 * 60)


@pytest.fixture
def client(test_settings):
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client
