import base64
import json
import time

import pytest

from vault.authservice.config import AuthSettings
from vault.authservice.crypto import HS256TokenSigner
from vault.authservice.service import TokenService
from vault.core.errors import InvalidTokenError, UnauthorizedError

SECRET = "test-jwt-secret-0123456789abcdefghijklmnop"
SEVEN_DAYS = 7 * 24 * 3600


class FixedClock:
    def __init__(self, ts: int):
        self.ts = ts

    def now_utc_ts(self) -> int:
        return self.ts


def make_tokens(issuer="lucasnerism", audience="users", secret=SECRET, clock=None):
    return TokenService(
        signer=HS256TokenSigner(secret),
        issuer=issuer,
        audience=audience,
        ttl_seconds=SEVEN_DAYS,
        clock=clock,
    )


def _payload(token: str) -> dict:
    seg = token.split(".")[1]
    return json.loads(base64.urlsafe_b64decode(seg + "=" * (-len(seg) % 4)))


def test_issue_embeds_subject_issuer_audience_and_seven_day_expiry():
    now = int(time.time())
    svc = make_tokens(clock=FixedClock(now))
    payload = _payload(svc.issue(42).token)
    assert payload["sub"] == "42"
    assert payload["iss"] == "lucasnerism"
    assert payload["aud"] == "users"
    assert payload["exp"] == now + SEVEN_DAYS


def test_verify_returns_typed_claims():
    svc = make_tokens()
    claims = svc.verify(svc.issue(7).token)
    assert claims.subject == 7
    assert claims.issuer == "lucasnerism"
    assert claims.audience == "users"
    assert (claims.expires_at - claims.issued_at).total_seconds() == SEVEN_DAYS


def test_from_settings_uses_defaults():
    settings = AuthSettings(JWT_SECRET=SECRET)
    svc = TokenService.from_settings(settings, HS256TokenSigner(SECRET))
    assert svc.issuer == "lucasnerism"
    assert svc.audience == "users"
    assert svc.ttl_seconds == SEVEN_DAYS


def test_expired_token_fails():
    eight_days_ago = int(time.time()) - 8 * 24 * 3600
    token = make_tokens(clock=FixedClock(eight_days_ago)).issue(1).token
    with pytest.raises(InvalidTokenError):
        make_tokens().verify(token)


def test_foreign_signature_fails():
    token = make_tokens(secret="another-secret-0123456789abcdefghijklmn").issue(1).token
    with pytest.raises(InvalidTokenError):
        make_tokens().verify(token)


def test_tampered_payload_fails():
    svc = make_tokens()
    header, _, sig = svc.issue(1).token.split(".")
    forged = dict(_payload(svc.issue(1).token), sub="2")
    forged_seg = base64.urlsafe_b64encode(json.dumps(forged).encode()).rstrip(b"=").decode()
    with pytest.raises(InvalidTokenError):
        svc.verify(f"{header}.{forged_seg}.{sig}")


def test_issuer_mismatch_fails():
    token = make_tokens(issuer="someone-else").issue(1).token
    with pytest.raises(InvalidTokenError):
        make_tokens().verify(token)


def test_audience_mismatch_fails():
    token = make_tokens(audience="admins").issue(1).token
    with pytest.raises(InvalidTokenError):
        make_tokens().verify(token)


def test_non_numeric_subject_fails():
    signer = HS256TokenSigner(SECRET)
    token = signer.sign({
        "sub": "alice", "iss": "lucasnerism", "aud": "users",
        "iat": int(time.time()), "exp": int(time.time()) + 60,
    })
    with pytest.raises(InvalidTokenError):
        make_tokens().verify(token)


@pytest.mark.parametrize("garbage", ["", "abc", "a.b.c"])
def test_garbage_fails_as_unauthorized(garbage):
    with pytest.raises(UnauthorizedError):
        make_tokens().verify(garbage)
