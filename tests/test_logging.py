"""
Tests for log redaction.
"""

from stayfront.core.logging import redact_credentials


def test_credentials_are_redacted():
    event = {"event": "user_logged_in", "token": "abc", "Password": "hunter2", "user_id": 7}

    out = redact_credentials(None, "info", event)

    assert out == {"event": "user_logged_in", "token": "[redacted]", "Password": "[redacted]", "user_id": 7}
