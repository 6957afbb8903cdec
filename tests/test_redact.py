from __future__ import annotations

import uuid

from cookiesession._redact import describe_session, redact_cookie
from cookiesession.session import Session


def test_describe_session_hides_state_payload() -> None:
    sid, uid = uuid.uuid4(), uuid.uuid4()

    described = describe_session(Session(sid=sid, uid=uid, state=b"role=admin"))

    assert f"sid={sid}" in described
    assert f"uid={uid}" in described
    assert "state=<bytes:10b>" in described
    assert "role=admin" not in described


def test_redact_cookie_reports_size_only() -> None:
    assert redact_cookie("QUJD") == "<cookie:4c>"
    assert redact_cookie(None) == "<absent>"
