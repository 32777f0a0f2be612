"""
Tests for the local identity gateway (accounts and sessions in SQLite).
"""
from datetime import timedelta

import pytest

from core.datetime_utils import format_iso, utc_now
from core.exceptions import AuthenticationError, DuplicateAccountError
from services.identity_gateway import LocalIdentityGateway, _token_key


def test_sign_up_issues_session(identity_gateway):
    result = identity_gateway.sign_up("Student@CUK.ac.in", "secret1", "Ann")
    assert result.user.email == "student@cuk.ac.in"
    assert result.session is not None
    assert identity_gateway.get_user(result.session.access_token) == result.user


def test_password_is_hashed(identity_gateway, temp_store):
    identity_gateway.sign_up("a@b.co", "secret1")
    row = temp_store.select_one("users", {"email": "a@b.co"})
    assert row["password_hash"] != "secret1"


def test_tokens_are_stored_hashed(identity_gateway, temp_store):
    token = identity_gateway.sign_up("a@b.co", "secret1").session.access_token
    assert temp_store.select_one("sessions", {"id": token}) is None
    assert temp_store.select_one("sessions", {"id": _token_key(token)}) is not None


def test_duplicate_sign_up(identity_gateway):
    identity_gateway.sign_up("a@b.co", "secret1")
    with pytest.raises(DuplicateAccountError):
        identity_gateway.sign_up("A@B.co", "secret2")


def test_sign_in(identity_gateway):
    identity_gateway.sign_up("a@b.co", "secret1")
    session = identity_gateway.sign_in("a@b.co", "secret1")
    assert session.user.email == "a@b.co"

    with pytest.raises(AuthenticationError):
        identity_gateway.sign_in("a@b.co", "wrong")


def test_sign_out(identity_gateway):
    token = identity_gateway.sign_up("a@b.co", "secret1").session.access_token
    identity_gateway.sign_out(token)
    assert identity_gateway.get_user(token) is None


def test_expired_session_is_removed(temp_store):
    gateway = LocalIdentityGateway(store=temp_store, session_ttl_minutes=60)
    token = gateway.sign_up("a@b.co", "secret1").session.access_token
    temp_store.update("sessions", _token_key(token), {"expires_at": format_iso(utc_now() - timedelta(minutes=1))})

    assert gateway.get_user(token) is None
    assert temp_store.select_one("sessions", {"id": _token_key(token)}) is None


def test_abandoned_expired_sessions_pruned_on_next_sign_in(temp_store):
    gateway = LocalIdentityGateway(store=temp_store, session_ttl_minutes=60)
    abandoned = gateway.sign_up("a@b.co", "secret1").session.access_token
    live = gateway.sign_up("c@d.co", "secret2").session.access_token
    temp_store.update("sessions", _token_key(abandoned), {"expires_at": format_iso(utc_now() - timedelta(minutes=1))})

    fresh = gateway.sign_in("c@d.co", "secret2").access_token

    remaining = {row["id"] for row in temp_store.select("sessions")}
    assert remaining == {_token_key(live), _token_key(fresh)}
