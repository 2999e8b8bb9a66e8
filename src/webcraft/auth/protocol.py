"""Protocol defining the auth backend interface.

Both StytchConsumerClient and MockAuthClient implement this protocol,
allowing them to be used interchangeably behind IdentityProvider.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from webcraft.auth.models import ProviderResponse


class AuthBackendProtocol(Protocol):
    """Protocol for identity provider backends.

    Every method returns a ProviderResponse; expected failures (bad
    credentials, unreachable provider, revoked session) are reported in
    ``error`` and never raised.
    """

    async def sign_in_with_password(
        self, email: str, password: str
    ) -> ProviderResponse:
        """Authenticate an email/password pair.

        Returns:
            ProviderResponse whose data is the new Session.
        """
        ...

    async def sign_up(self, email: str, password: str) -> ProviderResponse:
        """Create a user with an email/password pair.

        Returns:
            ProviderResponse whose data is SignUpData.
        """
        ...

    async def authenticate_session(self, session_token: str) -> ProviderResponse:
        """Check that a stored session is still live.

        Returns:
            ProviderResponse whose data is the refreshed Session.
        """
        ...

    async def revoke_session(self, session_token: str) -> ProviderResponse:
        """Revoke a session on the provider side."""
        ...

    def get_oauth_start_url(
        self,
        provider: str,
        public_token: str,
        login_redirect_url: str,
    ) -> ProviderResponse:
        """Build the URL that starts an OAuth flow.

        Args:
            provider: OAuth provider name (e.g. "google").
            public_token: The provider's public token.
            login_redirect_url: Where the provider sends the user back.

        Returns:
            ProviderResponse whose data is the start URL.
        """
        ...

    async def authenticate_oauth(self, token: str) -> ProviderResponse:
        """Exchange the token appended to the OAuth return URL.

        Returns:
            ProviderResponse whose data is the new Session.
        """
        ...
