from typing import List
from pydantic import BaseModel, ConfigDict, Field


class VaultStateBase(BaseModel):
    namespace: str
    admin: str
    underlying_asset: str
    share_asset: str
    custody_account: str
    cooldown_duration: int = 0
    vesting_duration: int = 0
    min_shares: int = 0


# Properties shared by models stored in DB
class VaultStateInDBBase(VaultStateBase):
    model_config = ConfigDict(from_attributes=True)

    accounts_initialized: bool = False


# Properties to return to client
class VaultInfo(VaultStateInDBBase):
    rewarders: List[str] = []
    blacklist: List[str] = []
    total_shares: int = 0
    holder_count: int = 0
    custody_balance: int = 0
    unvested_amount: int = 0
    total_assets: int = 0
    price_per_share: float = 1.0


class InitializeVaultRequest(BaseModel):
    namespace: str = Field(min_length=1, max_length=64)
    admin: str = Field(min_length=1)
    min_shares: int = Field(ge=0)
    underlying_asset: str | None = None


class DurationRequest(BaseModel):
    duration: int = Field(ge=0)


class IdentityRequest(BaseModel):
    identity: str = Field(min_length=1)


class TransferAdminRequest(BaseModel):
    new_admin: str = Field(min_length=1)


class RoleChange(BaseModel):
    identity: str
    changed: bool
