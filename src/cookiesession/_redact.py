"""Helpers for safe debug logging.

Cookie values and session ``state`` must never reach the logs.
"""

from __future__ import annotations

from cookiesession.session import Session


def redact_cookie(value: str | None) -> str:
    """Describe a cookie value by size only."""
    if value is None:
        return "<absent>"
    return f"<cookie:{len(value)}c>"


def describe_session(session: Session) -> str:
    """Identify *session* for logs without its ``state`` payload."""
    return f"sid={session.sid} uid={session.uid} real_uid={session.real_uid} state=<bytes:{len(session.state)}b>"
