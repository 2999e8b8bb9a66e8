"""Post-authentication redirect policy.

Pure functions mapping an auth event and the current URL to a navigation
target. No I/O, so they can be tested without a browser or provider.
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import parse_qs, quote, urlencode, urlsplit

from webcraft.auth.models import AuthChangeEvent

if TYPE_CHECKING:
    from webcraft.auth.models import Session
    from webcraft.config import SiteConfig

logger = logging.getLogger(__name__)

REDIRECT_PARAM = "redirect"


def read_redirect_param(current_url: str) -> str | None:
    """Return the ``redirect`` query parameter of a URL, if present."""
    values = parse_qs(urlsplit(current_url).query).get(REDIRECT_PARAM)
    if not values or not values[0]:
        return None
    return values[0]


def is_safe_redirect(target: str) -> bool:
    """Only same-site relative targets are followed.

    Rejects absolute URLs, scheme-relative ``//host`` URLs and backslash
    variants browsers treat the same way.
    """
    if not target or target.startswith(("//", "\\", "/\\")):
        return False
    parts = urlsplit(target)
    return not parts.scheme and not parts.netloc


def _page_name(path: str) -> str:
    return PurePosixPath(path).name


def is_auth_entry_page(current_url: str, site: SiteConfig) -> bool:
    """True on the login or registration page."""
    name = _page_name(urlsplit(current_url).path)
    return name in {site.login_page, site.register_page}


def build_login_redirect(current_url: str, site: SiteConfig) -> str:
    """Login page URL that brings the user back to ``current_url``'s path.

    The path is percent-encoded with ``/`` left as is, e.g.
    ``login.html?redirect=/dashboard.html``.
    """
    path = urlsplit(current_url).path or site.home_page
    return f"{site.login_page}?{REDIRECT_PARAM}={quote(path, safe='/')}"


def build_oauth_return_url(current_url: str, site: SiteConfig, base_url: str) -> str:
    """Absolute login page URL the OAuth provider sends the user back to.

    Carries the current ``redirect`` parameter forward so the original
    destination survives the round trip.
    """
    url = f"{base_url}/{site.login_page}"
    redirect = read_redirect_param(current_url)
    if redirect:
        url = f"{url}?{urlencode({REDIRECT_PARAM: redirect})}"
    return url


def resolve_auth_redirect(
    event: AuthChangeEvent,
    session: Session | None,
    current_url: str,
    site: SiteConfig,
) -> str | None:
    """Decide where to navigate after an auth-state-change event.

    Returns:
        The target path, or None when the current page is already right.
    """
    if event != AuthChangeEvent.SIGNED_IN or session is None:
        return None

    redirect = read_redirect_param(current_url)
    if redirect:
        if is_safe_redirect(redirect):
            return redirect
        logger.warning("Ignoring off-site redirect target: %s", redirect)

    if is_auth_entry_page(current_url, site):
        return site.dashboard_page
    return None
