"""Client dashboard, the site's only protected page."""

from nicegui import ui

from webcraft.auth.display import display_user_info
from webcraft.pages.layout import site_layout
from webcraft.pages.session import build_coordinator
from webcraft.ui.formatting import format_date


@ui.page("/dashboard.html")
async def dashboard_page() -> None:
    """Dashboard. Anonymous visitors are sent to the login page."""
    coordinator = build_coordinator()
    session = await coordinator.require_session_or_redirect()
    if session is None:
        return

    with site_layout("Dashboard", public=False) as header:
        ui.label("Tableau de bord").classes("text-2xl font-bold mb-4")

        with ui.card().classes("card p-4 max-w-md"):
            with ui.row().classes("gap-2"):
                ui.label("Connecté en tant que").classes("font-semibold")
                card_email = ui.label("").classes("user-email")
            if session.expires_at is not None:
                ui.label(
                    f"Session valable jusqu'au {format_date(session.expires_at)}"
                ).classes("text-grey-7 text-sm")

        ui.button(
            "Se déconnecter",
            icon="logout",
            on_click=coordinator.handle_logout_and_redirect,
        ).props('data-testid="logout-btn"').classes("mt-4")

    targets = [card_email]
    if header.user_email is not None:
        targets.append(header.user_email)
    display_user_info(session, targets)
