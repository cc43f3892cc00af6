from sqlalchemy import BigInteger
from sqlmodel import SQLModel, Field


class Asset(SQLModel, table=True):
    __tablename__ = "assets"

    id: str = Field(primary_key=True)
    supply: int = Field(default=0, sa_type=BigInteger)
    mint_authority: str | None = None
    decimals: int = 0


class TokenAccount(SQLModel, table=True):
    __tablename__ = "token_accounts"

    asset: str = Field(foreign_key="assets.id", primary_key=True)
    owner: str = Field(primary_key=True)
    balance: int = Field(default=0, sa_type=BigInteger)
