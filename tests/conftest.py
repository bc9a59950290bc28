"""
Shared test configuration and fixtures for the frames quickstart tests.
"""

import pytest

from social.farcaster.quickstart.account.custody import derive_account
from tests.test_helpers import ABANDON_PHRASE, TEST_PHRASE


@pytest.fixture(scope="session")
def test_account():
    """Custody account for the well-known test mnemonic."""
    return derive_account(TEST_PHRASE)


@pytest.fixture(scope="session")
def abandon_account():
    return derive_account(ABANDON_PHRASE)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run with no quickstart environment variables and no .env files."""
    for name in (
        "DEBUG",
        "NEYNAR_API_KEY",
        "NEYNAR_CLIENT_ID",
        "NEYNAR_API_BASE",
        "LOOKUP_TIMEOUT",
        "SEED_PHRASE",
        "SENTRY_DSN",
        "NEXT_PUBLIC_FRAME_NAME",
        "NEXT_PUBLIC_FRAME_BUTTON_TEXT",
        "NEXT_PUBLIC_FRAME_ICON_IMAGE_URL",
        "NEXT_PUBLIC_FRAME_SPLASH_IMAGE_URL",
        "LOGGING_CONFIG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
