from sqlalchemy import BigInteger
from sqlmodel import SQLModel, Field


# A row exists only while the owner's request is pending; no row means no request
class UnstakeRequest(SQLModel, table=True):
    __tablename__ = "unstake_requests"

    owner: str = Field(primary_key=True)
    namespace: str = Field(foreign_key="vault_state.namespace", primary_key=True)
    locked_shares: int = Field(sa_type=BigInteger)
    requested_at: int = Field(sa_type=BigInteger)
    ready_at: int = Field(sa_type=BigInteger)
