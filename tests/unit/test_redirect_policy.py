"""Unit tests for the post-authentication redirect policy."""

from __future__ import annotations

import pytest

from webcraft.auth.models import AuthChangeEvent
from webcraft.auth.redirect import (
    build_login_redirect,
    build_oauth_return_url,
    is_auth_entry_page,
    is_safe_redirect,
    read_redirect_param,
    resolve_auth_redirect,
)
from webcraft.config import SiteConfig

from tests.helpers.auth_fakes import make_session

SITE = SiteConfig()


class TestResolveAuthRedirect:
    """SIGNED_IN navigation decisions."""

    def test_redirect_param_wins(self) -> None:
        target = resolve_auth_redirect(
            AuthChangeEvent.SIGNED_IN,
            make_session(),
            "http://localhost:8080/login.html?redirect=/foo",
            SITE,
        )
        assert target == "/foo"

    def test_redirect_param_is_url_decoded(self) -> None:
        target = resolve_auth_redirect(
            AuthChangeEvent.SIGNED_IN,
            make_session(),
            "login.html?redirect=%2Fprojets%2Fdevis.html",
            SITE,
        )
        assert target == "/projets/devis.html"

    def test_register_page_without_param_goes_to_dashboard(self) -> None:
        target = resolve_auth_redirect(
            AuthChangeEvent.SIGNED_IN, make_session(), "register.html", SITE
        )
        assert target == "dashboard.html"

    def test_login_page_without_param_goes_to_dashboard(self) -> None:
        target = resolve_auth_redirect(
            AuthChangeEvent.SIGNED_IN,
            make_session(),
            "http://localhost:8080/login.html",
            SITE,
        )
        assert target == "dashboard.html"

    def test_other_page_without_param_stays(self) -> None:
        target = resolve_auth_redirect(
            AuthChangeEvent.SIGNED_IN,
            make_session(),
            "http://localhost:8080/index.html",
            SITE,
        )
        assert target is None

    def test_signed_in_without_session_is_ignored(self) -> None:
        assert (
            resolve_auth_redirect(
                AuthChangeEvent.SIGNED_IN, None, "login.html?redirect=/foo", SITE
            )
            is None
        )

    def test_signed_out_is_a_no_op(self) -> None:
        assert (
            resolve_auth_redirect(
                AuthChangeEvent.SIGNED_OUT, None, "login.html?redirect=/foo", SITE
            )
            is None
        )

    def test_off_site_redirect_falls_back_to_dashboard(self) -> None:
        target = resolve_auth_redirect(
            AuthChangeEvent.SIGNED_IN,
            make_session(),
            "login.html?redirect=https://evil.example/phish",
            SITE,
        )
        assert target == "dashboard.html"

    def test_custom_page_names(self) -> None:
        site = SiteConfig(login_page="connexion.html", dashboard_page="espace.html")
        target = resolve_auth_redirect(
            AuthChangeEvent.SIGNED_IN, make_session(), "/connexion.html", site
        )
        assert target == "espace.html"


class TestBuildLoginRedirect:
    """Login URL built by the page guard."""

    def test_bare_page_path(self) -> None:
        assert (
            build_login_redirect("dashboard.html", SITE)
            == "login.html?redirect=dashboard.html"
        )

    def test_absolute_url_keeps_path_only(self) -> None:
        assert (
            build_login_redirect("http://localhost:8080/dashboard.html?tab=2", SITE)
            == "login.html?redirect=/dashboard.html"
        )

    def test_path_is_percent_encoded(self) -> None:
        assert (
            build_login_redirect("/mes projets/été.html", SITE)
            == "login.html?redirect=/mes%20projets/%C3%A9t%C3%A9.html"
        )

    def test_round_trips_through_read_redirect_param(self) -> None:
        url = build_login_redirect("/mes projets/été.html", SITE)
        assert read_redirect_param(url) == "/mes projets/été.html"


class TestSafeRedirect:
    """Only same-site relative targets are followed."""

    @pytest.mark.parametrize(
        "target", ["/foo", "dashboard.html", "/a/b.html?x=1", "page.html#top"]
    )
    def test_relative_targets_are_safe(self, target: str) -> None:
        assert is_safe_redirect(target) is True

    @pytest.mark.parametrize(
        "target",
        [
            "",
            "https://evil.example",
            "//evil.example/path",
            "\\\\evil.example",
            "/\\evil.example",
            "javascript:alert(1)",
        ],
    )
    def test_off_site_targets_are_rejected(self, target: str) -> None:
        assert is_safe_redirect(target) is False


class TestHelpers:
    """Query parameter and page detection helpers."""

    def test_read_redirect_param_missing(self) -> None:
        assert read_redirect_param("login.html") is None

    def test_read_redirect_param_empty(self) -> None:
        assert read_redirect_param("login.html?redirect=") is None

    def test_entry_page_matches_file_name_only(self) -> None:
        assert is_auth_entry_page("/login.html?x=1", SITE) is True
        assert is_auth_entry_page("/blog/login.html-tips", SITE) is False

    def test_oauth_return_url_without_redirect(self) -> None:
        assert (
            build_oauth_return_url("login.html", SITE, "https://webcraft.fr")
            == "https://webcraft.fr/login.html"
        )

    def test_oauth_return_url_carries_redirect(self) -> None:
        assert (
            build_oauth_return_url(
                "login.html?redirect=/dashboard.html", SITE, "https://webcraft.fr"
            )
            == "https://webcraft.fr/login.html?redirect=%2Fdashboard.html"
        )
