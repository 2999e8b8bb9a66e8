"""Authentication pages for the WebCraft site.

Provides the login page (password and OAuth, plus the OAuth return leg)
and the registration page. Navigation after a successful sign-in is done
by the session coordinator's SIGNED_IN handler, not by these pages.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from nicegui import ui

from webcraft.auth.models import OAuthProvider
from webcraft.config import get_settings
from webcraft.pages.layout import site_layout
from webcraft.pages.session import build_coordinator, get_query_param, validate_token
from webcraft.ui.timing import throttle
from webcraft.ui.validation import (
    EMAIL_FIELD,
    PASSWORD_FIELD,
    FieldRules,
    validate_form,
)

if TYPE_CHECKING:
    from nicegui.elements.input import Input
    from nicegui.elements.label import Label

    from webcraft.auth.coordinator import SessionCoordinator

logger = logging.getLogger(__name__)

LOGIN_RULES = {
    "email": EMAIL_FIELD,
    "password": FieldRules(required=True, input_type="password"),
}
REGISTER_RULES = {"email": EMAIL_FIELD, "password": PASSWORD_FIELD}

# Repeated clicks within this window do not resubmit; failures reopen it
SUBMIT_THROTTLE_SECONDS = 1.0

_OAUTH_LABELS = {
    OAuthProvider.GOOGLE: ("Continuer avec Google", "mdi-google"),
    OAuthProvider.GITHUB: ("Continuer avec GitHub", "mdi-github"),
    OAuthProvider.LINKEDIN: ("Continuer avec LinkedIn", "mdi-linkedin"),
}


def _credential_inputs(rules: dict[str, FieldRules]) -> tuple[Input, Input]:
    email_input = (
        ui.input(
            label="Adresse e-mail",
            placeholder="vous@exemple.fr",
            validation=rules["email"],
        )
        .props('type=email data-testid="email-input"')
        .classes("w-full")
    )
    password_input = (
        ui.input(
            label="Mot de passe",
            password=True,
            password_toggle_button=True,
            validation=rules["password"],
        )
        .props('data-testid="password-input"')
        .classes("w-full")
    )
    return email_input, password_input


def _error_label() -> Label:
    label = ui.label("").classes("error-message-text text-negative")
    label.set_visibility(False)
    return label


def _show_error(label: Label, message: str) -> None:
    label.set_text(message)
    label.set_visibility(True)


def _form_is_valid(
    email_input: Input, password_input: Input, rules: dict[str, FieldRules]
) -> bool:
    errors = validate_form(
        {"email": email_input.value, "password": password_input.value}, rules
    )
    if errors:
        # Surface the messages next to the fields
        email_input.validate()
        password_input.validate()
        return False
    return True


def _build_oauth_section(coordinator: SessionCoordinator) -> None:
    with ui.column().classes("w-full gap-2"):
        for provider, (label, icon) in _OAUTH_LABELS.items():
            ui.button(
                label,
                icon=icon,
                on_click=partial(coordinator.start_oauth_login, provider.value),
            ).props(f'outline data-testid="oauth-{provider.value}-btn"').classes(
                "w-full"
            )


async def _complete_oauth(coordinator: SessionCoordinator, token: str) -> None:
    """Finish the OAuth return leg; SIGNED_IN then drives the redirect."""
    ui.label("Connexion en cours...").classes("text-xl")
    spinner = ui.spinner()
    result = await coordinator.complete_oauth_login(token)
    spinner.set_visibility(False)
    if not result.success:
        assert result.error is not None
        ui.label(f"Erreur : {result.error.message}").classes("text-negative")
        ui.link("Réessayer", get_settings().site.login_page)


@ui.page("/login.html")
async def login_page() -> None:
    """Login page with password and OAuth options."""
    site = get_settings().site
    coordinator = build_coordinator()

    with (
        site_layout("Connexion"),
        ui.column().classes("items-center w-full q-py-xl"),
    ):
        ui.label("Connexion").classes("text-2xl font-bold mb-4")

        token = get_query_param("token")
        if get_query_param("stytch_token_type") == "oauth":
            if validate_token(token):
                assert token is not None
                await _complete_oauth(coordinator, token)
                return
            logger.warning("OAuth return: invalid or missing token")
            ui.notify("Jeton de connexion invalide", type="negative")

        with ui.card().classes("w-96 p-4"):
            email_input, password_input = _credential_inputs(LOGIN_RULES)
            error_label = _error_label()

            @throttle(limit=SUBMIT_THROTTLE_SECONDS)
            async def submit() -> None:
                error_label.set_visibility(False)
                if not _form_is_valid(email_input, password_input, LOGIN_RULES):
                    submit.reset()
                    return
                result = await coordinator.login_with_credentials(
                    email_input.value.strip(), password_input.value
                )
                if not result.success:
                    submit.reset()
                    assert result.error is not None
                    _show_error(error_label, result.error.message)

            password_input.on("keydown.enter", submit)
            ui.button("Se connecter", on_click=submit).props(
                'data-testid="login-btn"'
            ).classes("w-full mt-2")

        ui.label("— ou —").classes("my-4")
        with ui.card().classes("w-96 p-4"):
            _build_oauth_section(coordinator)

        with ui.row().classes("mt-4"):
            ui.label("Pas encore de compte ?")
            ui.link("Créer un compte", site.register_page)


@ui.page("/register.html")
async def register_page() -> None:
    """Registration page; a session issued at signup signs the user in."""
    site = get_settings().site
    coordinator = build_coordinator()

    with (
        site_layout("Inscription"),
        ui.column().classes("items-center w-full q-py-xl"),
    ):
        ui.label("Créer un compte").classes("text-2xl font-bold mb-4")

        with ui.card().classes("w-96 p-4"):
            email_input, password_input = _credential_inputs(REGISTER_RULES)
            error_label = _error_label()
            pending_label = ui.label(
                "Compte créé ! Consultez votre boîte mail pour confirmer "
                "votre adresse."
            ).classes("text-positive")
            pending_label.set_visibility(False)

            @throttle(limit=SUBMIT_THROTTLE_SECONDS)
            async def submit() -> None:
                error_label.set_visibility(False)
                if not _form_is_valid(email_input, password_input, REGISTER_RULES):
                    submit.reset()
                    return
                result = await coordinator.register_with_credentials(
                    email_input.value.strip(), password_input.value
                )
                if not result.success:
                    submit.reset()
                    assert result.error is not None
                    _show_error(error_label, result.error.message)
                    return
                if result.data is not None and result.data.session is None:
                    pending_label.set_visibility(True)

            password_input.on("keydown.enter", submit)
            ui.button("Créer mon compte", on_click=submit).props(
                'data-testid="register-btn"'
            ).classes("w-full mt-2")

        ui.label("— ou —").classes("my-4")
        with ui.card().classes("w-96 p-4"):
            _build_oauth_section(coordinator)

        with ui.row().classes("mt-4"):
            ui.label("Déjà inscrit ?")
            ui.link("Se connecter", site.login_page)
