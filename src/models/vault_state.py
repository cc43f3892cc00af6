from datetime import datetime, timezone

from sqlalchemy import BigInteger
from sqlmodel import SQLModel, Field


class VaultStateBase(SQLModel):
    admin: str
    underlying_asset: str
    share_asset: str
    custody_account: str
    cooldown_duration: int = Field(default=0)
    vesting_duration: int = Field(default=0)
    min_shares: int = Field(default=0, sa_type=BigInteger)


# Database model, one row per namespace
class VaultState(VaultStateBase, table=True):
    __tablename__ = "vault_state"

    namespace: str = Field(primary_key=True)
    # reward still vesting at last_distribution_at, see utils.calculate_price.unvested_amount
    vesting_amount: int = Field(default=0, sa_type=BigInteger)
    last_distribution_at: int = Field(default=0, sa_type=BigInteger)
    accounts_initialized: bool = Field(default=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))


class Rewarder(SQLModel, table=True):
    __tablename__ = "vault_rewarders"

    namespace: str = Field(foreign_key="vault_state.namespace", primary_key=True)
    identity: str = Field(primary_key=True)


class BlacklistEntry(SQLModel, table=True):
    __tablename__ = "vault_blacklist"

    namespace: str = Field(foreign_key="vault_state.namespace", primary_key=True)
    identity: str = Field(primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
