from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Header
from sqlmodel import Session

from core.clock import Clock, system_clock
from core.constants import CALLER_HEADER
from core.db import engine
from services.roles import require_user_identity


def get_db() -> Generator:
    with Session(engine) as session:
        yield session


def get_clock() -> Clock:
    return system_clock


def get_caller(x_caller: Annotated[str, Header(alias=CALLER_HEADER, min_length=1)]) -> str:
    # identities are provisioned upstream, the gateway forwards the authenticated one
    require_user_identity(x_caller)
    return x_caller


SessionDep = Annotated[Session, Depends(get_db)]
ClockDep = Annotated[Clock, Depends(get_clock)]
CallerDep = Annotated[str, Depends(get_caller)]
