from __future__ import annotations

import pytest
from pydantic import ValidationError

from dmserver.core.exceptions import IdentifierExistsError
from dmserver.core.security import verify_password
from dmserver.crud import users
from dmserver.crud.users import authenticate, create_user, get_by_email, get_by_username
from dmserver.db.session import Database
from dmserver.schemas.auth import Credentials


def _credentials(**overrides) -> Credentials:
    data = {"username": "alice", "email": "alice@dmserver.io", "password": "very_secret_password123"}
    data.update(overrides)
    return Credentials(**data)


def test_create_user_persists_hash_not_password(db_session):
    u = create_user(db_session, _credentials())
    assert u.id
    assert u.passhash != "very_secret_password123"
    assert verify_password("very_secret_password123", u.passhash)
    assert get_by_email(db_session, "alice@dmserver.io").id == u.id


def test_create_user_rejects_taken_identifiers(db_session):
    create_user(db_session, _credentials())

    with pytest.raises(IdentifierExistsError) as exc_info:
        create_user(db_session, _credentials(email="new@dmserver.io"))
    assert exc_info.value.identifier_type == "username"

    with pytest.raises(IdentifierExistsError) as exc_info:
        create_user(db_session, _credentials(username="alice2"))
    assert exc_info.value.identifier_type == "email"
    assert str(exc_info.value) == "email 'alice@dmserver.io' already exists"


def test_authenticate(db_session):
    create_user(db_session, _credentials())
    assert authenticate(db_session, "alice", "very_secret_password123") is not None
    assert authenticate(db_session, "alice", "wrong") is None
    assert authenticate(db_session, "nobody", "very_secret_password123") is None


@pytest.mark.parametrize("field", ["username", "email", "password"])
def test_credentials_require_non_empty_fields(field):
    with pytest.raises(ValidationError):
        _credentials(**{field: ""})


def test_credentials_are_immutable():
    creds = _credentials()
    with pytest.raises(ValidationError):
        creds.password = "changed"


def test_database_lifecycle():
    db = Database("sqlite://")
    with pytest.raises(RuntimeError):
        db.session()

    db.init()
    with db.session() as session:
        assert get_by_username(session, "alice") is None

    db.dispose()
    assert db.engine is None
    with pytest.raises(RuntimeError):
        db.session()


def test_create_user_maps_unique_violation_to_identifier_exists(db_session, monkeypatch):
    create_user(db_session, _credentials())

    # first lookup misses, as if another sign-up committed right after it
    real_lookup = users.get_by_username
    calls = []

    def stale_lookup(db, username):
        calls.append(username)
        return None if len(calls) == 1 else real_lookup(db, username)

    monkeypatch.setattr(users, "get_by_username", stale_lookup)

    with pytest.raises(IdentifierExistsError) as exc_info:
        create_user(db_session, _credentials(email="new@dmserver.io"))
    assert exc_info.value.identifier_type == "username"
    assert len(calls) == 2
    assert get_by_email(db_session, "new@dmserver.io") is None
