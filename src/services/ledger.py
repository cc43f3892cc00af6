import logging

from sqlmodel import Session, select

from core.errors import InsufficientBalance, UnknownAsset, ZeroAmount
from models.ledger import Asset, TokenAccount
from utils.calculate_price import checked_add, checked_sub

logger = logging.getLogger(__name__)


class FungibleLedger:
    """Balance storage for the underlying and share assets.

    Every operation validates before it writes and never commits; the
    enclosing unit of work decides whether the writes become visible.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_asset(self, asset_id: str) -> Asset:
        asset = self.session.get(Asset, asset_id)
        if asset is None:
            raise UnknownAsset(f"Asset {asset_id} is not registered")
        return asset

    def asset_exists(self, asset_id: str) -> bool:
        return self.session.get(Asset, asset_id) is not None

    def create_asset(
        self, asset_id: str, mint_authority: str | None = None, decimals: int = 0
    ) -> Asset:
        asset = Asset(id=asset_id, mint_authority=mint_authority, decimals=decimals)
        self.session.add(asset)
        self.session.flush()
        logger.info(f"Asset {asset_id} created with mint authority {mint_authority}")
        return asset

    def _account(self, asset_id: str, owner: str) -> TokenAccount | None:
        return self.session.get(TokenAccount, (asset_id, owner))

    def open_account(self, asset_id: str, owner: str) -> TokenAccount:
        self.get_asset(asset_id)
        account = self._account(asset_id, owner)
        if account is None:
            account = TokenAccount(asset=asset_id, owner=owner, balance=0)
            self.session.add(account)
            self.session.flush()
        return account

    def balance_of(self, asset_id: str, owner: str) -> int:
        account = self._account(asset_id, owner)
        return account.balance if account is not None else 0

    def supply_of(self, asset_id: str) -> int:
        return self.get_asset(asset_id).supply

    def holders(self, asset_id: str) -> list[TokenAccount]:
        return self.session.exec(
            select(TokenAccount)
            .where(TokenAccount.asset == asset_id)
            .where(TokenAccount.balance > 0)
        ).all()

    def mint(self, asset_id: str, owner: str, amount: int) -> None:
        if amount <= 0:
            raise ZeroAmount()
        asset = self.get_asset(asset_id)
        new_supply = checked_add(asset.supply, amount)
        account = self.open_account(asset_id, owner)
        new_balance = checked_add(account.balance, amount)

        asset.supply = new_supply
        account.balance = new_balance
        self.session.add(asset)
        self.session.add(account)

    def burn(self, asset_id: str, owner: str, amount: int) -> None:
        if amount <= 0:
            raise ZeroAmount()
        asset = self.get_asset(asset_id)
        account = self._account(asset_id, owner)
        if account is None or account.balance < amount:
            raise InsufficientBalance(
                f"{owner} holds {self.balance_of(asset_id, owner)} {asset_id}, cannot burn {amount}"
            )
        new_supply = checked_sub(asset.supply, amount)

        asset.supply = new_supply
        account.balance -= amount
        self.session.add(asset)
        self.session.add(account)

    def transfer(self, asset_id: str, source: str, destination: str, amount: int) -> None:
        if amount <= 0:
            raise ZeroAmount()
        self.get_asset(asset_id)
        source_account = self._account(asset_id, source)
        if source_account is None or source_account.balance < amount:
            raise InsufficientBalance(
                f"{source} holds {self.balance_of(asset_id, source)} {asset_id}, cannot transfer {amount}"
            )
        if source == destination:
            return
        destination_account = self.open_account(asset_id, destination)
        new_balance = checked_add(destination_account.balance, amount)

        source_account.balance -= amount
        destination_account.balance = new_balance
        self.session.add(source_account)
        self.session.add(destination_account)
