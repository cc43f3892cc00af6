import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import models  # noqa: F401
from core.config import settings
from core.errors import VaultError

logger = logging.getLogger(__name__)


def make_engine(url: str):
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(url, connect_args=connect_args)
    return create_engine(url)


engine = make_engine(str(settings.SQLALCHEMY_DATABASE_URI))


# make sure all SQLModel models are imported (models) before initializing DB
# otherwise, SQLModel might fail to initialize relationships properly
# for more details: https://github.com/tiangolo/full-stack-fastapi-postgresql/issues/28


def init_db(bind=None) -> None:
    SQLModel.metadata.create_all(bind or engine)


@contextmanager
def atomic(session: Session, operation: str = "operation") -> Iterator[Session]:
    """Run a block as one all-or-nothing unit of work.

    The block does its validation first and its writes last; whatever it
    raises, the session is rolled back so none of the writes become visible.
    """
    try:
        yield session
        session.commit()
    except VaultError as e:
        session.rollback()
        logger.warning(f"{operation} rejected: {e.error_code} {e.error_message}")
        raise
    except Exception:
        session.rollback()
        logger.exception(f"{operation} aborted")
        raise
