import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger
from sqlmodel import SQLModel, Field


class TransactionKind(str, enum.Enum):
    stake = "stake"
    start_unstake = "start_unstake"
    unstake = "unstake"
    reward = "reward"
    transfer = "transfer"


class Transaction(SQLModel, table=True):
    __tablename__ = "transaction"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    namespace: str = Field(foreign_key="vault_state.namespace", index=True)
    kind: TransactionKind
    actor: str
    counterparty: str | None = None
    # underlying moved by the operation
    amount: int = Field(default=0, sa_type=BigInteger)
    # shares minted, locked, burned or transferred
    shares: int = Field(default=0, sa_type=BigInteger)
    created_on: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
