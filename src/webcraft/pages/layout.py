"""Shared layout components for the WebCraft site.

Provides the header with its mobile (burger) menu, smooth anchor
scrolling and the reveal-on-scroll animation for cards.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from nicegui import ui

from webcraft.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator

    from nicegui.elements.label import Label
    from nicegui.elements.link import Link

# Elements that fade in the first time they scroll into view
ANIMATED_SELECTOR = ".card, .stat-card, .step-card, .feature"

_SITE_CSS = """
<style>
html { scroll-behavior: smooth; }
body.menu-open { overflow: hidden; }
.animate-on-scroll { opacity: 0; transform: translateY(24px);
    transition: opacity .6s ease-out, transform .6s ease-out; }
.animate-on-scroll.is-visible { opacity: 1; transform: none; }
</style>
"""

# Falls back to showing everything when IntersectionObserver is missing.
_SCROLL_ANIMATION_JS = f"""
<script>
(function() {{
    function initScrollAnimations() {{
        var elements = document.querySelectorAll('{ANIMATED_SELECTOR}');
        if (!('IntersectionObserver' in window)) {{
            elements.forEach(function(el) {{ el.classList.add('is-visible'); }});
            return;
        }}
        var observer = new IntersectionObserver(function(entries, obs) {{
            entries.forEach(function(entry) {{
                if (entry.isIntersecting) {{
                    entry.target.classList.add('is-visible');
                    obs.unobserve(entry.target);
                }}
            }});
        }}, {{ threshold: 0.1 }});
        elements.forEach(function(el) {{
            if (el.classList.contains('animate-on-scroll')) return;
            el.classList.add('animate-on-scroll');
            observer.observe(el);
        }});
    }}
    window.__initScrollAnimations = initScrollAnimations;
    document.addEventListener('DOMContentLoaded', initScrollAnimations);
    setTimeout(initScrollAnimations, 300);
}})();
</script>
"""

_PUBLIC_NAV = (
    ("Fonctionnalités", "#features"),
    ("Comment ça marche", "#steps"),
    ("Chiffres", "#stats"),
)


@dataclass
class SiteHeader:
    """Header elements the session helpers update after a session lookup."""

    nav_login: Link | None = None
    nav_cta: Link | None = None
    user_email: Label | None = None


def _nav_links(prefix: str) -> None:
    for label, anchor in _PUBLIC_NAV:
        ui.link(label, f"{prefix}{anchor}").classes("text-white no-underline")


@contextmanager
def site_layout(
    title: str = "WebCraft", *, public: bool = True, home: bool = False
) -> Iterator[SiteHeader]:
    """Context manager for consistent page layout with header and mobile menu.

    Usage:
        @ui.page("/index.html")
        async def index_page():
            with site_layout("Accueil") as header:
                ui.label("Page content here")

    Args:
        title: Page title shown in the browser tab.
        public: Public pages get login / call-to-action links; private
            pages get the signed-in user's e-mail instead.
        home: Section links point at anchors on the current page instead
            of the home page.

    Yields:
        The header elements, for ``update_public_header`` and
        ``display_user_info``.
    """
    site = get_settings().site
    header = SiteHeader()
    prefix = "" if home else site.home_page

    ui.page_title(f"{title} | WebCraft")
    ui.add_head_html(_SITE_CSS)
    ui.add_body_html(_SCROLL_ANIMATION_JS)

    def set_menu(*, open_: bool) -> None:
        drawer.set_value(open_)
        flag = "true" if open_ else "false"
        ui.run_javascript(f"document.body.classList.toggle('menu-open', {flag})")

    with ui.header().classes("bg-primary items-center q-py-xs"):
        burger = ui.button(icon="menu").props("flat color=white").classes(
            "burger-menu lg:hidden"
        )
        ui.link("WebCraft", site.home_page).classes(
            "text-h6 text-white no-underline q-ml-sm"
        )
        ui.element("div").classes("flex-grow")

        with ui.row().classes("gap-4 items-center max-lg:hidden"):
            if public:
                _nav_links(prefix)
        if public:
            header.nav_login = ui.link("Connexion", site.login_page).classes(
                "nav-login text-white no-underline"
            )
            header.nav_cta = ui.link("Commencer", site.register_page).classes(
                "nav-cta btn-secondary text-white no-underline q-ml-md"
            )
        else:
            header.user_email = ui.label("").classes(
                "user-email text-white text-body2 q-mr-md"
            )

    with ui.left_drawer(value=False).classes("nav-links bg-grey-2") as drawer:
        ui.label("Menu").classes("text-h6 q-pa-md")
        ui.separator()
        with ui.column().classes("q-pa-md gap-3"):
            for label, anchor in _PUBLIC_NAV:
                ui.link(label, f"{prefix}{anchor}").on(
                    "click", lambda: set_menu(open_=False)
                )

    burger.on("click", lambda: set_menu(open_=not drawer.value))

    with ui.element("div").classes("q-pa-md w-full"):
        yield header
