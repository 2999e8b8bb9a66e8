"""Render session details into page elements.

Pure functions over element handles, so the session logic never looks
elements up itself. Pages pass the NiceGUI elements that carry the
``user-email``, ``nav-login``, ``nav-cta`` classes and the ``main-cta`` id.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from nicegui.element import Element
    from nicegui.elements.mixins.text_element import TextElement

    from webcraft.auth.models import Session
    from webcraft.config import SiteConfig

DASHBOARD_NAV_LABEL = "Dashboard"
DASHBOARD_CTA_LABEL = "Accéder au Dashboard"


def display_user_info(session: Session | None, targets: Iterable[TextElement]) -> None:
    """Show the signed-in user's e-mail in every target element."""
    if session is None or not session.email:
        return
    for element in targets:
        element.set_text(session.email)


def _point_at(element: Element, href: str) -> None:
    element.props(f"href={href}")


def update_public_header(
    session: Session | None,
    *,
    site: SiteConfig,
    nav_login: Element | None = None,
    nav_cta: TextElement | None = None,
    main_cta: TextElement | None = None,
) -> None:
    """Switch the public header to its signed-in state.

    Hides the login link and turns both calls to action into links to the
    dashboard. Does nothing for anonymous visitors.
    """
    if session is None:
        return
    if nav_login is not None:
        nav_login.set_visibility(False)
    if nav_cta is not None:
        nav_cta.set_text(DASHBOARD_NAV_LABEL)
        _point_at(nav_cta, site.dashboard_page)
        nav_cta.classes(remove="btn-secondary", add="btn-primary")
    if main_cta is not None:
        main_cta.set_text(DASHBOARD_CTA_LABEL)
        _point_at(main_cta, site.dashboard_page)
