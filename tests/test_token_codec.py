import base64
import json
from datetime import datetime, timedelta, timezone

from jose import jwt

from app.core.config import Settings
from app.core.security import TokenCodec
from tests.conftest import TEST_SECRET


def _b64(data):
    return base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()

def _claims(**overrides):
    now = int(datetime.now(timezone.utc).timestamp())
    claims = {"sub": "user-1", "sid": "session-1", "role": "default", "iat": now, "exp": now + 3600}
    claims.update(overrides)
    return claims


def test_issue_then_verify_returns_claims(codec):
    token = codec.issue(user_id="user-1", session_id="session-1", role="default")

    payload = codec.verify(token)

    assert payload["sub"] == "user-1"
    assert payload["sid"] == "session-1"
    assert payload["role"] == "default"

def test_expiry_is_seven_days_after_issue(codec):
    payload = codec.verify(codec.issue(user_id="u", session_id="s", role="default"))

    assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())

def test_token_signed_with_other_secret_is_rejected(codec):
    other = TokenCodec(Settings(secret_key="another-secret"))
    token = other.issue(user_id="u", session_id="s", role="default")

    assert codec.verify(token) is None

def test_expired_token_is_rejected(codec):
    token = jwt.encode(_claims(iat=1_000_000, exp=1_000_100), TEST_SECRET, algorithm="HS256")

    assert codec.verify(token) is None

def test_other_algorithm_is_rejected(codec):
    token = jwt.encode(_claims(), TEST_SECRET, algorithm="HS512")

    assert codec.verify(token) is None

def test_unsigned_token_is_rejected(codec):
    token = f"{_b64({'alg': 'none', 'typ': 'JWT'})}.{_b64(_claims())}."

    assert codec.verify(token) is None

def test_garbage_is_rejected(codec):
    assert codec.verify("not-a-token") is None
    assert codec.verify("") is None
