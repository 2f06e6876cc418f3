# backend/dmserver/db/init_db.py
from sqlalchemy.engine import Engine

from dmserver.db.base import Base

# models must be imported so their tables are registered on Base.metadata
from dmserver import models  # noqa: F401


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
