"""Auth client factory.

Provides a factory function to get the appropriate auth backend
based on configuration (real Stytch or mock for testing).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from webcraft.config import get_settings

if TYPE_CHECKING:
    from webcraft.auth.protocol import AuthBackendProtocol


# Cached client instance; the mock keeps its users and sessions here
_client_instance: AuthBackendProtocol | None = None


def get_auth_client() -> AuthBackendProtocol:
    """Get the appropriate auth backend based on configuration.

    If DEV__AUTH_MOCK=true, returns MockAuthClient.
    Otherwise, returns StytchConsumerClient with real credentials.
    Either way the instance is shared across requests.

    Raises:
        ValueError: If stytch.project_id is empty and mock mode is disabled.
    """
    global _client_instance  # noqa: PLW0603
    if _client_instance is not None:
        return _client_instance

    settings = get_settings()

    if settings.dev.auth_mock:
        from webcraft.auth.mock import MockAuthClient

        _client_instance = MockAuthClient()
        return _client_instance

    stytch = settings.stytch
    if not stytch.project_id:
        msg = (
            "STYTCH__PROJECT_ID is required when DEV__AUTH_MOCK is not enabled. "
            "Set STYTCH__PROJECT_ID and STYTCH__SECRET in your .env file."
        )
        raise ValueError(msg)

    from webcraft.auth.client import StytchConsumerClient

    _client_instance = StytchConsumerClient(
        project_id=stytch.project_id,
        secret=stytch.secret.get_secret_value(),
        environment=stytch.environment,
    )
    return _client_instance


def clear_config_cache() -> None:
    """Clear the configuration and client caches.

    Useful for testing when you need to reload configuration
    or reset mock client state.
    """
    global _client_instance  # noqa: PLW0603
    get_settings.cache_clear()
    _client_instance = None
