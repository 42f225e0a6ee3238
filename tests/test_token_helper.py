import datetime

import jwt
import pytest

from config.settings import settings
from helpers.token_helper import (
    create_access_token,
    issue_attendance_token,
    issue_token,
    verify_token,
)
from utils.errors import InvalidToken


def test_issue_and_verify():
    claims = verify_token(issue_token("a@campus.edu"))
    assert claims["email"] == "a@campus.edu"
    assert claims["exp"] - claims["iat"] == 24 * 60 * 60


def test_tokens_for_same_email_are_distinct():
    assert issue_token("a@campus.edu") != issue_token("a@campus.edu")


def test_attendance_token_carries_id_and_salt():
    claims = verify_token(issue_attendance_token("a@campus.edu", 7, "abc"))
    assert claims["id"] == 7
    assert claims["salt"] == "abc"
    assert claims["exp"] - claims["iat"] == 12 * 60 * 60


def test_expired_token_rejected():
    token = create_access_token({"email": "a@campus.edu"}, datetime.timedelta(seconds=-30))
    with pytest.raises(InvalidToken) as exc:
        verify_token(token)
    assert exc.value.message == "Token has expired"


def test_payload_without_email_rejected():
    token = create_access_token({"sub": "nobody"}, datetime.timedelta(minutes=5))
    with pytest.raises(InvalidToken) as exc:
        verify_token(token)
    assert exc.value.message == "Invalid token payload"


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_garbage_rejected(token):
    with pytest.raises(InvalidToken):
        verify_token(token)


def test_wrong_signature_rejected():
    token = jwt.encode({"email": "a@campus.edu"}, "some-other-secret-value", algorithm=settings.ALGORITHM)
    with pytest.raises(InvalidToken):
        verify_token(token)
