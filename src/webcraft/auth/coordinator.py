"""Session coordinator.

Uniform async API over the identity provider for the site's pages, plus
the page-lifetime subscription that applies the post-login redirect
policy.

Credential operations (login, register, OAuth completion) return an
AuthResult for the page to display. Lifecycle operations (logout,
session queries, event handling) log failures and carry on, so a
secondary failure never blocks navigation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from webcraft.auth.models import (
    AuthChangeEvent,
    AuthResult,
    ErrorInfo,
    OAuthProvider,
    SessionLookup,
    SessionStatus,
)
from webcraft.auth.redirect import (
    build_login_redirect,
    build_oauth_return_url,
    resolve_auth_redirect,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from webcraft.auth.models import Session
    from webcraft.auth.provider import IdentityProvider
    from webcraft.config import SiteConfig

logger = logging.getLogger(__name__)


class SessionCoordinator:
    """Coordinates sign-in, sign-out and post-auth navigation for one page.

    Args:
        provider: Identity provider bound to the browser's session storage.
        navigate: Sends the browser to a URL (``ui.navigate.to`` in pages).
        current_url: Returns the page's current URL, query string included.
        site: Page names used as navigation targets.
        base_url: Public base URL, used for the OAuth return address.
    """

    def __init__(
        self,
        provider: IdentityProvider,
        navigate: Callable[[str], None],
        current_url: Callable[[], str],
        *,
        site: SiteConfig,
        base_url: str = "",
    ) -> None:
        self._provider = provider
        self._navigate = navigate
        self._current_url = current_url
        self._site = site
        self._base_url = base_url.rstrip("/")
        self._redirect_consumed = False
        self._subscription = provider.on_auth_state_change(self._on_auth_state_change)

    def close(self) -> None:
        """Drop the auth-state subscription at the end of the page."""
        self._subscription.unsubscribe()

    # ------------------------------------------------------------------
    # Credential operations
    # ------------------------------------------------------------------
    async def login_with_credentials(self, identifier: str, secret: str) -> AuthResult:
        response = await self._provider.sign_in_with_password(identifier, secret)
        if response.error is not None:
            logger.warning("Login error: %s", response.error.message)
            return AuthResult.failed(response.error)
        return AuthResult.ok()

    async def register_with_credentials(
        self, identifier: str, secret: str
    ) -> AuthResult:
        response = await self._provider.sign_up(identifier, secret)
        if response.error is not None:
            logger.warning("Registration error: %s", response.error.message)
            return AuthResult.failed(response.error)
        return AuthResult.ok(response.data)

    async def complete_oauth_login(self, token: str) -> AuthResult:
        """Finish an OAuth round trip with the token from the return URL."""
        response = await self._provider.exchange_oauth_token(token)
        if response.error is not None:
            logger.warning("OAuth completion error: %s", response.error.message)
            return AuthResult.failed(response.error)
        return AuthResult.ok()

    async def start_oauth_login(self, provider_name: str) -> None:
        """Send the browser to the OAuth provider's start page.

        Unsupported providers and start failures are logged only; the user
        stays on the current page.
        """
        try:
            provider = OAuthProvider(provider_name)
        except ValueError:
            logger.error("OAuth error: unsupported provider %r", provider_name)
            return

        return_url = build_oauth_return_url(
            self._current_url(), self._site, self._base_url
        )
        response = self._provider.sign_in_with_oauth(provider.value, return_url)
        if response.error is not None:
            logger.error(
                "OAuth error with %s: %s", provider.value, response.error.message
            )
            return
        self._navigate(response.data)

    # ------------------------------------------------------------------
    # Lifecycle operations
    # ------------------------------------------------------------------
    async def logout(self) -> None:
        response = await self._provider.sign_out()
        if response.error is not None:
            logger.warning("Logout error: %s", response.error.message)

    async def lookup_session(self) -> SessionLookup:
        response = await self._provider.get_session()
        if response.error is not None:
            return SessionLookup(status=SessionStatus.ERROR, error=response.error)
        if response.data is None:
            return SessionLookup(status=SessionStatus.ANONYMOUS)
        return SessionLookup(status=SessionStatus.AUTHENTICATED, session=response.data)

    async def get_current_session(self) -> Session | None:
        lookup = await self.lookup_session()
        if lookup.error is not None:
            _log_session_error(lookup.error)
        return lookup.session

    async def require_session_or_redirect(self) -> Session | None:
        """Page guard: return the session or send the user to log in."""
        session = await self.get_current_session()
        if session is None:
            self._navigate(build_login_redirect(self._current_url(), self._site))
            return None
        return session

    async def handle_logout_and_redirect(self) -> None:
        await self.logout()
        self._navigate(self._site.home_page)

    # ------------------------------------------------------------------
    # Event reaction
    # ------------------------------------------------------------------
    def _on_auth_state_change(
        self, event: AuthChangeEvent, session: Session | None
    ) -> None:
        if event == AuthChangeEvent.SIGNED_OUT:
            return
        if self._redirect_consumed:
            return
        try:
            target = resolve_auth_redirect(
                event, session, self._current_url(), self._site
            )
            if target is None:
                return
            self._redirect_consumed = True
            logger.info("Redirecting after %s to %s", event, target)
            self._navigate(target)
        except Exception:
            logger.exception("Post-auth redirect failed")


def _log_session_error(error: ErrorInfo) -> None:
    logger.warning("Error getting session (%s): %s", error.kind, error.message)
