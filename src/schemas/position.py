from typing import Annotated, Literal, Union
from pydantic import BaseModel, ConfigDict, Field


class NoUnstakeRequest(BaseModel):
    status: Literal["none"] = "none"


class PendingUnstakeRequest(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: Literal["pending"] = "pending"
    locked_shares: int
    requested_at: int
    ready_at: int


UnstakeState = Annotated[
    Union[NoUnstakeRequest, PendingUnstakeRequest], Field(discriminator="status")
]


class UserAssets(BaseModel):
    namespace: str
    owner: str
    shares: int
    locked_shares: int
    shares_value: int
    locked_value: int
    underlying_balance: int
    blacklisted: bool = False
    unstake: UnstakeState = NoUnstakeRequest()


class AmountRequest(BaseModel):
    amount: int


class TransferSharesRequest(BaseModel):
    destination: str = Field(min_length=1)
    amount: int


class StakeResult(BaseModel):
    shares: int


class UnstakeResult(BaseModel):
    released: int


class RewardResult(BaseModel):
    custody_balance: int
