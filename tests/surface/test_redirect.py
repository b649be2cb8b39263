"""Tests for redirect URL inspection."""

from __future__ import annotations

import pytest

from implicit_auth.surface.redirect import RedirectOutcome, is_local_redirect, parse_redirect_fragment


class TestIsLocalRedirect:
    """Tests for is_local_redirect."""

    @pytest.mark.parametrize(
        "url",
        [
            "http://localhost:3000/cb#id_token=x",
            "http://LOCALHOST:3000/cb",
            "https://localhost/",
        ],
    )
    def test_local_hosts_match(self, url: str) -> None:
        """Given a localhost URL (any case), returns True."""
        assert is_local_redirect(url, "localhost") is True

    @pytest.mark.parametrize(
        "url",
        [
            "https://login.microsoftonline.com/common/oauth2/authorize?redirect_uri=http://localhost:3000",
            "https://example.com/#localhost",
            "about:blank",
            "",
        ],
    )
    def test_other_hosts_do_not_match(self, url: str) -> None:
        """Given a provider page that merely mentions localhost, returns False."""
        assert is_local_redirect(url, "localhost") is False


class TestParseRedirectFragment:
    """Tests for parse_redirect_fragment."""

    def test_token_extracted_verbatim(self) -> None:
        """Given state then id_token, returns the token unchanged."""
        # Act
        outcome = parse_redirect_fragment("http://localhost:3000/cb#state=s1&id_token=abc.def.ghi")

        # Assert
        assert outcome == RedirectOutcome(token="abc.def.ghi")

    def test_error_marker(self) -> None:
        """Given an error key, returns the error code."""
        # Act
        outcome = parse_redirect_fragment(
            "http://localhost:3000/cb#error=access_denied&error_description=User+cancelled"
        )

        # Assert
        assert outcome == RedirectOutcome(error="access_denied")

    def test_first_marker_wins(self) -> None:
        """Given error before id_token, the error wins."""
        outcome = parse_redirect_fragment("http://localhost/#error=login_required&id_token=abc.def.ghi")
        assert outcome is not None
        assert outcome.error == "login_required"
        assert outcome.token is None

    @pytest.mark.parametrize(
        "url",
        [
            "http://localhost:3000/cb",
            "http://localhost:3000/cb#",
            "http://localhost:3000/cb#state=s1&session_state=abc",
        ],
    )
    def test_no_marker_returns_none(self, url: str) -> None:
        """Given no id_token or error key, returns None (keep waiting)."""
        assert parse_redirect_fragment(url) is None
