# backend/dmserver/crud/users.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dmserver.core.exceptions import IdentifierExistsError
from dmserver.core.security import hash_password, verify_password
from dmserver.models.user import User
from dmserver.schemas.auth import Credentials


def get_by_email(db: Session, email: str) -> User | None:
    stmt = select(User).where(User.email == email)
    return db.execute(stmt).scalar_one_or_none()


def get_by_username(db: Session, username: str) -> User | None:
    stmt = select(User).where(User.username == username)
    return db.execute(stmt).scalar_one_or_none()


def _ensure_available(db: Session, credentials: Credentials) -> None:
    if get_by_username(db, credentials.username):
        raise IdentifierExistsError(credentials.username, "username")
    if get_by_email(db, credentials.email):
        raise IdentifierExistsError(credentials.email, "email")


def create_user(db: Session, credentials: Credentials) -> User:
    _ensure_available(db, credentials)

    u = User(
        username=credentials.username,
        email=credentials.email,
        passhash=hash_password(credentials.password),
    )

    db.add(u)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # a concurrent sign-up took the username or email after the check above
        _ensure_available(db, credentials)
        raise
    db.refresh(u)
    return u


def authenticate(db: Session, username: str, password: str) -> User | None:
    u = get_by_username(db, username)
    if u is None or not verify_password(password, u.passhash):
        return None
    return u
