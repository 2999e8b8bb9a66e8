"""Shared fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tests.helpers.auth_fakes import BASE_URL, FakeBrowser
from webcraft.auth.coordinator import SessionCoordinator
from webcraft.auth.mock import MockAuthClient
from webcraft.auth.provider import IdentityProvider
from webcraft.config import SiteConfig


@pytest.fixture
def site() -> SiteConfig:
    return SiteConfig()


@pytest.fixture
def storage() -> dict:
    """Per-browser session storage (app.storage.user in production)."""
    return {}


@pytest.fixture
def backend() -> MockAuthClient:
    return MockAuthClient()


@pytest.fixture
def provider(backend: MockAuthClient, storage: dict) -> IdentityProvider:
    return IdentityProvider(backend, storage, public_token="public-token-test")


@pytest.fixture
def browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def coordinator(
    provider: IdentityProvider, browser: FakeBrowser, site: SiteConfig
) -> Iterator[SessionCoordinator]:
    coordinator = SessionCoordinator(
        provider,
        navigate=browser.navigate,
        current_url=browser.current_url,
        site=site,
        base_url=BASE_URL,
    )
    yield coordinator
    coordinator.close()
