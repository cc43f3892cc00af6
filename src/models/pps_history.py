from datetime import datetime
from sqlalchemy import BigInteger
from sqlmodel import SQLModel, Field
import uuid


class PricePerShareHistoryBase(SQLModel):
    datetime: datetime
    price_per_share: float
    total_assets: int = Field(default=0, sa_type=BigInteger)
    total_shares: int = Field(default=0, sa_type=BigInteger)


class PricePerShareHistory(PricePerShareHistoryBase, table=True):
    __tablename__ = "pps_history"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    namespace: str = Field(foreign_key="vault_state.namespace", index=True)
