"""Shared pytest fixtures for WebCraft tests."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import pytest_asyncio

from webcraft.auth.factory import clear_config_cache


@pytest.fixture(autouse=True)
def _reset_auth_caches():
    """Drop cached settings and auth clients around every test."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest_asyncio.fixture
async def mock_stytch_client():
    """Create a mocked Stytch consumer Client for unit tests.

    Patches the Client constructor to return a mock, allowing
    tests to set up expected responses without making real API calls.

    Made async to ensure proper event loop handling with pytest-asyncio.
    """
    with patch("webcraft.auth.client.Client") as mock_cls:
        mock_client = MagicMock()
        mock_cls.return_value = mock_client
        yield mock_client
