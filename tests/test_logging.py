from __future__ import annotations

from storehub.observability.logging import REDACTED, redact_sensitive


def test_credentials_are_redacted_at_any_depth() -> None:
    event = {
        "event": "login_failed",
        "user_id": 7,
        "password": "pw123456",
        "body": {"email": "a@x.com", "name": "Alice", "nested": {"token": "abc"}},
    }

    out = redact_sensitive(None, "info", event)

    assert out["event"] == "login_failed"
    assert out["user_id"] == 7
    assert out["password"] == REDACTED
    assert out["body"]["email"] == REDACTED
    assert out["body"]["name"] == "Alice"
    assert out["body"]["nested"]["token"] == REDACTED
