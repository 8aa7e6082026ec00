"""Shared pytest fixtures."""

import pytest
from fastapi import Response

from app.auth import (
    CookieOptions,
    FlashChannel,
    MutableCookieJar,
    SessionCodec,
    SessionManager,
    SigningContext,
    StaticCredentialChecker,
)
from tests.helpers import TEST_SECRET


@pytest.fixture
def codec():
    return SessionCodec(SigningContext.from_secret(TEST_SECRET))


@pytest.fixture
def session_options():
    return CookieOptions(max_age=600, httponly=True)


@pytest.fixture
def manager(codec, session_options):
    checker = StaticCredentialChecker(username="admin", password="password", display_name="Admin")
    return SessionManager(codec, checker, session_options)


@pytest.fixture
def flash_channel():
    return FlashChannel(CookieOptions(max_age=60, httponly=False))


@pytest.fixture
def response():
    return Response()


@pytest.fixture
def jar(response):
    return MutableCookieJar(response)
