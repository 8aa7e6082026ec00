"""
Tests for the session lifecycle: login, get_session, logout, update_session.
"""

from datetime import timedelta

import pytest
from fastapi import Response
from freezegun import freeze_time

from app.auth import (
    Credentials,
    InvalidCredentials,
    MutableCookieJar,
    SessionManager,
    SessionPayload,
    StaticCredentialChecker,
    UserRef,
    hash_password,
    session_cookie_options,
)
from app.auth.session import now_ms
from app.config import Settings
from tests.helpers import set_cookies

NOW = "2026-10-18 10:00:00"
ADMIN = Credentials(username="admin", password="password")


def login_cookies(manager) -> dict:
    """Log in and return the resulting request cookie mapping."""
    response = Response()
    manager.login(ADMIN, MutableCookieJar(response))
    return {"session": set_cookies(response)["session"].value}


def cookies_with_remaining(codec, seconds: float) -> dict:
    payload = SessionPayload(user=UserRef(name="Admin"), expires=now_ms() + int(seconds * 1000))
    return {"session": codec.encode(payload)}


class TestLogin:
    """Tests for login."""

    @freeze_time(NOW)
    def test_valid_credentials_set_session_cookie(self, manager, response, jar):
        payload = manager.login(ADMIN, jar)

        morsel = set_cookies(response)["session"]
        assert morsel["httponly"] is True
        assert morsel["path"] == "/"
        assert morsel["samesite"].lower() == "lax"
        assert morsel["max-age"] == "600"
        assert not morsel["secure"]

        session = manager.get_session({"session": morsel.value})
        assert session == payload
        assert session.user == UserRef(name="Admin")
        assert session.expires == now_ms() + 600_000

    def test_invalid_credentials_raise_and_set_nothing(self, manager, response, jar):
        with pytest.raises(InvalidCredentials):
            manager.login(Credentials(username="bob", password="wrong"), jar)

        assert response.headers.getlist("set-cookie") == []

    @pytest.mark.parametrize("username,password", [
        ("admin", "wrong"),
        ("Admin", "password"),
        ("", ""),
    ])
    def test_partial_matches_rejected(self, manager, jar, username, password):
        with pytest.raises(InvalidCredentials):
            manager.login(Credentials(username=username, password=password), jar)

    def test_secure_flag_in_production(self, codec, response, jar):
        options = session_cookie_options(Settings(environment="production"))
        checker = StaticCredentialChecker(username="admin", password="password")
        SessionManager(codec, checker, options).login(ADMIN, jar)

        assert set_cookies(response)["session"]["secure"] is True


class TestGetSession:
    """Tests for reading the session."""

    def test_no_cookie(self, manager):
        assert manager.get_session({}) is None

    def test_garbage_cookie(self, manager):
        assert manager.get_session({"session": "not-a-token"}) is None

    def test_expired_session_rejected_though_authentic(self, manager, codec):
        with freeze_time(NOW) as frozen:
            cookies = login_cookies(manager)
            frozen.tick(timedelta(seconds=601))

            assert codec.decode(cookies["session"]) is not None
            assert manager.get_session(cookies) is None

    def test_session_at_exact_expiry_rejected(self, manager):
        with freeze_time(NOW) as frozen:
            cookies = login_cookies(manager)
            frozen.tick(timedelta(seconds=600))
            assert manager.get_session(cookies) is None

    @freeze_time(NOW)
    def test_repeated_reads_identical(self, manager):
        cookies = login_cookies(manager)
        first = manager.get_session(cookies)
        assert first is not None
        assert manager.get_session(cookies) == first
        assert manager.get_session(cookies) == first

    @freeze_time(NOW)
    def test_anonymous_session_not_authenticated(self, manager, codec):
        cookies = {"session": codec.encode(SessionPayload(user=None, expires=now_ms() + 60_000))}
        assert manager.get_session(cookies) is not None
        assert manager.is_authenticated(cookies) is False

    @freeze_time(NOW)
    def test_is_authenticated(self, manager):
        assert manager.is_authenticated(login_cookies(manager)) is True
        assert manager.is_authenticated({}) is False


class TestLogout:
    """Tests for logout."""

    def test_logout_clears_cookie(self, manager, response, jar):
        manager.logout(jar)

        morsel = set_cookies(response)["session"]
        assert morsel.value == ""
        assert morsel["max-age"] == "0"
        assert morsel["path"] == "/"
        assert manager.get_session({"session": morsel.value}) is None


class TestUpdateSession:
    """Tests for sliding session refresh."""

    @freeze_time(NOW)
    def test_low_ttl_extended_to_full_ttl(self, manager, codec, response, jar):
        cookies = cookies_with_remaining(codec, 90)

        assert manager.update_session(cookies, jar) is True

        morsel = set_cookies(response)["session"]
        refreshed = manager.get_session({"session": morsel.value})
        assert refreshed.remaining_ms(now_ms()) == 600_000
        assert refreshed.user == UserRef(name="Admin")
        assert morsel["httponly"] is True
        assert morsel["max-age"] == "600"

    @freeze_time(NOW)
    def test_above_threshold_unchanged(self, manager, codec, response, jar):
        cookies = cookies_with_remaining(codec, 300)

        for _ in range(3):
            assert manager.update_session(cookies, jar) is False

        assert response.headers.getlist("set-cookie") == []

    @freeze_time(NOW)
    def test_exactly_at_threshold_unchanged(self, manager, codec, jar):
        assert manager.update_session(cookies_with_remaining(codec, 120), jar) is False

    @freeze_time(NOW)
    def test_just_below_threshold_refreshed(self, manager, codec, jar):
        assert manager.update_session(cookies_with_remaining(codec, 119.999), jar) is True

    @freeze_time(NOW)
    def test_expired_session_not_revived(self, manager, codec, response, jar):
        assert manager.update_session(cookies_with_remaining(codec, -5), jar) is False
        assert response.headers.getlist("set-cookie") == []

    @pytest.mark.parametrize("cookies", [{}, {"session": ""}, {"session": "x.y.z"}])
    def test_missing_or_invalid_cookie(self, manager, jar, cookies):
        assert manager.update_session(cookies, jar) is False

    @freeze_time(NOW)
    def test_anonymous_session_not_refreshed(self, manager, codec, jar):
        cookies = {"session": codec.encode(SessionPayload(user=None, expires=now_ms() + 30_000))}
        assert manager.update_session(cookies, jar) is False

    @freeze_time(NOW)
    def test_signing_failure_skips_refresh(self, manager, codec, response, jar, monkeypatch):
        cookies = cookies_with_remaining(codec, 90)

        def broken_sign(value):
            raise ValueError("unsupported hash type")

        monkeypatch.setattr(codec._signer, "sign", broken_sign)

        assert manager.update_session(cookies, jar) is False
        assert response.headers.getlist("set-cookie") == []

    def test_session_survives_with_periodic_requests(self, manager):
        """A request every 9 minutes keeps the session alive indefinitely."""
        with freeze_time(NOW) as frozen:
            cookies = login_cookies(manager)

            for _ in range(5):
                frozen.tick(timedelta(minutes=9))
                response = Response()
                assert manager.update_session(cookies, MutableCookieJar(response)) is True
                cookies = {"session": set_cookies(response)["session"].value}
                assert manager.get_session(cookies) is not None

    def test_threshold_must_be_below_ttl(self, codec, session_options):
        checker = StaticCredentialChecker(username="admin", password="password")
        with pytest.raises(ValueError):
            SessionManager(codec, checker, session_options, ttl_seconds=60, refresh_threshold_seconds=60)


class TestCredentialChecker:
    """Tests for the fixed-account credential check."""

    def test_plaintext_password(self):
        checker = StaticCredentialChecker(username="admin", password="password", display_name="Admin")
        assert checker.verify(ADMIN) == UserRef(name="Admin")
        assert checker.verify(Credentials(username="admin", password="nope")) is None

    def test_hash_takes_precedence(self):
        checker = StaticCredentialChecker(
            username="admin",
            password="password",
            password_hash=hash_password("s3cret"),
        )
        assert checker.verify(Credentials(username="admin", password="s3cret")) is not None
        assert checker.verify(ADMIN) is None

    def test_malformed_hash_never_matches(self):
        checker = StaticCredentialChecker(username="admin", password_hash="not-a-hash")
        assert checker.verify(Credentials(username="admin", password="not-a-hash")) is None

    def test_requires_a_password(self):
        with pytest.raises(ValueError):
            StaticCredentialChecker(username="admin")
