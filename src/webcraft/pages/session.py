"""Per-page wiring of the session coordinator.

Each NiceGUI page builds one coordinator bound to the browser's storage,
``ui.navigate.to`` and the page's request URL. The coordinator's event
subscription is dropped when the client is deleted; ``on_disconnect`` also fires on
transient reconnects.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nicegui import app, ui

from webcraft.auth import IdentityProvider, SessionCoordinator, get_auth_client
from webcraft.config import get_settings

if TYPE_CHECKING:
    from starlette.requests import Request

logger = logging.getLogger(__name__)

# Maximum token length accepted from a return URL
_MAX_TOKEN_LENGTH = 1000


def _request() -> Request:
    return ui.context.client.request


def get_query_param(name: str) -> str | None:
    """Get a query parameter from the current request."""
    return _request().query_params.get(name)


def validate_token(token: str | None) -> bool:
    """Reject missing or oversized tokens before they reach the provider."""
    if not token:
        return False
    if len(token) > _MAX_TOKEN_LENGTH:
        logger.warning("Token exceeds max length: %d chars", len(token))
        return False
    return True


def build_coordinator() -> SessionCoordinator:
    """Create the coordinator for the page being built."""
    settings = get_settings()
    client = ui.context.client
    request = client.request
    provider = IdentityProvider(
        get_auth_client(),
        app.storage.user,
        public_token=settings.stytch.public_token,
    )
    coordinator = SessionCoordinator(
        provider,
        navigate=ui.navigate.to,
        current_url=lambda: str(request.url),
        site=settings.site,
        base_url=settings.app.base_url,
    )
    client.on_delete(coordinator.close)
    return coordinator
