import pytest
from sqlmodel import Session

from core.clock import ManualClock
from core.db import init_db, make_engine
from helpers import fund_ledger, provision_vault
from services.ledger import FungibleLedger


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def ledger(db_session: Session):
    return fund_ledger(db_session)


@pytest.fixture
def vault(db_session: Session, ledger: FungibleLedger):
    return provision_vault(db_session)
