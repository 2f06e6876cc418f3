# backend/dmserver/db/session.py
from __future__ import annotations

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from dmserver.db.init_db import init_db

logger = logging.getLogger(__name__)

_IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class Database:
    """Owns the engine and session factory for one application instance.

    Call ``init()`` before handing out sessions and ``dispose()`` on shutdown.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self.engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    def init(self) -> None:
        kwargs: dict = {}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
        if self.url in _IN_MEMORY_URLS:
            # one shared connection, otherwise every session sees an empty db
            kwargs["poolclass"] = StaticPool

        self.engine = create_engine(self.url, **kwargs)
        self._session_factory = sessionmaker(autoflush=False, bind=self.engine)
        init_db(self.engine)
        logger.info("Database initialised (%s)", self.engine.url.render_as_string(hide_password=True))

    def session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Database.init() has not been called")
        return self._session_factory()

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database connections closed")
        self.engine = None
        self._session_factory = None


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()
