"""Public home page for the WebCraft site."""

from nicegui import ui

from webcraft.auth.display import update_public_header
from webcraft.config import get_settings
from webcraft.pages.layout import site_layout
from webcraft.pages.session import build_coordinator
from webcraft.ui.formatting import format_number

_FEATURES = (
    ("bolt", "Génération rapide", "Un site complet en quelques minutes."),
    ("palette", "Design sur mesure", "Des thèmes adaptés à votre marque."),
    (
        "lock",
        "Espace client sécurisé",
        "Connexion par e-mail, Google, GitHub ou LinkedIn.",
    ),
)

_STEPS = (
    ("1", "Décrivez votre projet"),
    ("2", "Personnalisez le résultat"),
    ("3", "Publiez en un clic"),
)

_STATS = (
    (12500, "sites générés"),
    (98.6, "% de clients satisfaits"),
    (1250000, "visiteurs par mois"),
)


@ui.page("/")
@ui.page("/index.html")
async def index_page() -> None:
    """Landing page. Signed-in visitors get dashboard links in the header."""
    site = get_settings().site
    coordinator = build_coordinator()

    with site_layout("Accueil", home=True) as header:
        with ui.column().classes("items-center w-full q-py-xl gap-4"):
            ui.label("Votre site web, généré par l'IA").classes(
                "text-4xl font-bold text-center"
            )
            ui.label(
                "WebCraft AI conçoit, rédige et met en ligne votre site vitrine."
            ).classes("text-lg text-grey-8 text-center")
            main_cta = (
                ui.link("Créer mon site", site.register_page)
                .props("id=main-cta")
                .classes("btn-primary text-lg")
            )

        with ui.row().classes("w-full justify-center gap-6 q-py-lg").props(
            "id=features"
        ):
            for icon, title, text in _FEATURES:
                with ui.card().classes("feature w-72"):
                    ui.icon(icon).classes("text-3xl text-primary")
                    ui.label(title).classes("text-lg font-semibold")
                    ui.label(text).classes("text-grey-8")

        with ui.row().classes("w-full justify-center gap-6 q-py-lg").props("id=steps"):
            for number, text in _STEPS:
                with ui.card().classes("step-card w-56 items-center"):
                    ui.label(number).classes("text-3xl font-bold text-primary")
                    ui.label(text).classes("text-center")

        with ui.row().classes("w-full justify-center gap-6 q-py-lg").props("id=stats"):
            for value, text in _STATS:
                with ui.card().classes("stat-card w-56 items-center"):
                    ui.label(format_number(value)).classes("text-2xl font-bold")
                    ui.label(text).classes("text-grey-8")

    session = await coordinator.get_current_session()
    update_public_header(
        session,
        site=site,
        nav_login=header.nav_login,
        nav_cta=header.nav_cta,
        main_cta=main_cta,
    )
