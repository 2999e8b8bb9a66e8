"""Identity provider client.

Binds an auth backend to one browser's session storage and publishes
auth-state-change events. This is the only code that reads or writes the
stored session; everything above it sees Session objects and events.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from webcraft.auth.models import (
    AuthChangeEvent,
    ErrorInfo,
    ErrorKind,
    ProviderResponse,
    Session,
    SignUpData,
)

if TYPE_CHECKING:
    from collections.abc import Callable, MutableMapping

    from webcraft.auth.protocol import AuthBackendProtocol

    AuthStateHandler = Callable[[AuthChangeEvent, Session | None], None]

logger = logging.getLogger(__name__)

SESSION_STORAGE_KEY = "auth_session"

_subscription_ids = itertools.count(1)


@dataclass
class Subscription:
    """Handle returned by ``IdentityProvider.on_auth_state_change``."""

    provider: IdentityProvider
    handler: AuthStateHandler
    id: int = field(default_factory=lambda: next(_subscription_ids))

    def unsubscribe(self) -> None:
        """Stop receiving events. Safe to call more than once."""
        self.provider._remove_subscription(self.id)


class IdentityProvider:
    """Session storage and event publication on top of an auth backend.

    Args:
        backend: Stytch or mock client.
        storage: Per-browser mapping the session is kept in
            (``app.storage.user`` under NiceGUI).
        public_token: Public token used to build OAuth start URLs.
    """

    def __init__(
        self,
        backend: AuthBackendProtocol,
        storage: MutableMapping[str, Any],
        *,
        public_token: str = "",
    ) -> None:
        self._backend = backend
        self._storage = storage
        self._public_token = public_token
        self._subscriptions: dict[int, Subscription] = {}

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------
    def on_auth_state_change(self, handler: AuthStateHandler) -> Subscription:
        subscription = Subscription(provider=self, handler=handler)
        self._subscriptions[subscription.id] = subscription
        return subscription

    def _remove_subscription(self, subscription_id: int) -> None:
        self._subscriptions.pop(subscription_id, None)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def _emit(self, event: AuthChangeEvent, session: Session | None) -> None:
        logger.debug("Auth state change: %s", event)
        for subscription in list(self._subscriptions.values()):
            try:
                subscription.handler(event, session)
            except Exception:
                logger.exception("Auth state handler failed for %s", event)

    # ------------------------------------------------------------------
    # Stored session
    # ------------------------------------------------------------------
    def _stored_session(self) -> Session | None:
        raw = self._storage.get(SESSION_STORAGE_KEY)
        if not isinstance(raw, dict):
            return None
        return Session.from_storage(raw)

    def _store(self, session: Session) -> None:
        self._storage[SESSION_STORAGE_KEY] = session.to_storage()

    def _clear(self) -> None:
        self._storage.pop(SESSION_STORAGE_KEY, None)

    def _signed_in(self, session: Session) -> None:
        self._store(session)
        self._emit(AuthChangeEvent.SIGNED_IN, session)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def sign_in_with_password(
        self, email: str, password: str
    ) -> ProviderResponse:
        response = await self._backend.sign_in_with_password(email, password)
        if response.ok:
            self._signed_in(response.data)
        return response

    async def sign_up(self, email: str, password: str) -> ProviderResponse:
        response = await self._backend.sign_up(email, password)
        if response.ok:
            data: SignUpData = response.data
            if data.session is not None:
                self._signed_in(data.session)
        return response

    def sign_in_with_oauth(self, provider: str, redirect_to: str) -> ProviderResponse:
        """Return the URL that starts the OAuth flow.

        The caller navigates there; the provider sends the browser back to
        ``redirect_to`` with a token for ``exchange_oauth_token``.
        """
        return self._backend.get_oauth_start_url(
            provider=provider,
            public_token=self._public_token,
            login_redirect_url=redirect_to,
        )

    async def exchange_oauth_token(self, token: str) -> ProviderResponse:
        response = await self._backend.authenticate_oauth(token)
        if response.ok:
            self._signed_in(response.data)
        return response

    async def sign_out(self) -> ProviderResponse:
        """Revoke the stored session and forget it locally.

        The local session is cleared and SIGNED_OUT emitted even when the
        revoke call fails; the backend error is still returned.
        """
        session = self._stored_session()
        response = ProviderResponse()
        if session is not None:
            response = await self._backend.revoke_session(session.session_token)
        self._clear()
        self._emit(AuthChangeEvent.SIGNED_OUT, None)
        return response

    async def get_session(self) -> ProviderResponse:
        """Return the live session, or None when there is none.

        A locally expired or provider-rejected session is dropped from
        storage and reported as a SESSION_QUERY error. Transport failures
        leave storage alone.
        """
        session = self._stored_session()
        if session is None:
            if SESSION_STORAGE_KEY in self._storage:
                self._clear()
            return ProviderResponse()

        if session.is_expired():
            self._drop_session()
            return ProviderResponse(
                error=ErrorInfo(
                    message="Session has expired.",
                    kind=ErrorKind.SESSION_QUERY,
                    error_type="session_expired",
                )
            )

        response = await self._backend.authenticate_session(session.session_token)
        if response.ok:
            self._store(response.data)
            return response

        if response.error.kind is not ErrorKind.TRANSPORT:
            self._drop_session()
        return ProviderResponse(error=response.error)

    def _drop_session(self) -> None:
        self._clear()
        self._emit(AuthChangeEvent.SIGNED_OUT, None)
