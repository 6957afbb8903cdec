from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import pydantic
import pytest

from cookiesession.session import EPOCH, Session


def test_defaults_are_anonymous_and_nil() -> None:
    session = Session()

    assert session.valid is False
    assert session.time == EPOCH
    assert session.sid.int == 0
    assert session.uid.int == 0
    assert session.real_uid.int == 0
    assert session.state == b""
    assert not session.is_authenticated


def test_is_authenticated_requires_valid_and_uid() -> None:
    uid = uuid.uuid4()

    assert not Session(uid=uid).is_authenticated
    assert not Session(valid=True).is_authenticated
    assert Session(valid=True, uid=uid).is_authenticated


def test_is_impersonating() -> None:
    admin, user = uuid.uuid4(), uuid.uuid4()

    assert Session(valid=True, uid=user, real_uid=admin).is_impersonating
    assert not Session(valid=True, uid=user, real_uid=user).is_impersonating
    assert not Session(valid=True, uid=user).is_impersonating
    assert not Session(valid=False, uid=user, real_uid=admin).is_impersonating


def test_expires_at_adds_ttl() -> None:
    saved = datetime(2024, 5, 1, tzinfo=UTC)
    assert Session(time=saved).expires_at(3600) == saved + timedelta(hours=1)


def test_assignment_is_validated() -> None:
    session = Session()
    with pytest.raises(pydantic.ValidationError):
        session.sid = "not-a-uuid"  # type: ignore[assignment]


def test_state_is_not_in_repr() -> None:
    assert "secret-payload" not in repr(Session(state=b"secret-payload"))
