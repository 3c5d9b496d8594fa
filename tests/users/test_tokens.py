from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from classroom_attendance.auth.tokens import CredentialService
from classroom_attendance.core.exceptions import AuthenticationInvalid


def test_issue_then_verify_returns_user_id():
    creds = CredentialService("s3cret")

    token = creds.issue_credential(42)

    assert creds.verify_credential(token) == 42


def test_token_signed_with_other_secret_is_rejected():
    token = CredentialService("other").issue_credential(1)

    with pytest.raises(AuthenticationInvalid):
        CredentialService("s3cret").verify_credential(token)


def test_expired_token_is_rejected():
    creds = CredentialService("s3cret", expire_days=7)
    token = creds.issue_credential(1, now=datetime.now(timezone.utc) - timedelta(days=8))

    with pytest.raises(AuthenticationInvalid):
        creds.verify_credential(token)


def test_token_still_valid_before_expiry():
    creds = CredentialService("s3cret", expire_days=7)
    token = creds.issue_credential(5, now=datetime.now(timezone.utc) - timedelta(days=6))

    assert creds.verify_credential(token) == 5


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_is_rejected(token):
    with pytest.raises(AuthenticationInvalid):
        CredentialService("s3cret").verify_credential(token)


def test_non_numeric_subject_is_rejected():
    exp = datetime.now(timezone.utc) + timedelta(days=1)
    token = jwt.encode({"sub": "admin", "exp": exp}, "s3cret", algorithm="HS256")

    with pytest.raises(AuthenticationInvalid):
        CredentialService("s3cret").verify_credential(token)


def test_cookie_max_age_matches_lifetime():
    assert CredentialService("s3cret", expire_days=7).max_age_seconds == 7 * 24 * 3600


def test_empty_secret_not_allowed():
    with pytest.raises(ValueError):
        CredentialService("")
