import logging

from sqlmodel import Session

from core.clock import Clock, system_clock
from core.db import atomic
from core.errors import BelowMinShares, InsufficientBalance, ZeroAmount
from models.transaction import TransactionKind
from models.vault_state import VaultState
from services.history import record_price_per_share, record_transaction
from services.ledger import FungibleLedger
from services.registry import get_active_vault_state
from services.roles import require_not_blacklisted, require_user_identity
from utils.calculate_price import checked_add, convert_to_shares, total_assets

logger = logging.getLogger(__name__)


def check_min_shares(vault_state: VaultState, caller: str, new_supply: int) -> None:
    # the admin may seed a vault below the floor
    if caller == vault_state.admin:
        return
    if 0 < new_supply < vault_state.min_shares:
        raise BelowMinShares(
            f"Share supply {new_supply} would be below the minimum of {vault_state.min_shares}"
        )


def stake(
    session: Session,
    caller: str,
    namespace: str,
    amount: int,
    clock: Clock = system_clock,
) -> int:
    """Deposit ``amount`` of the underlying asset and mint shares at the current price.

    Returns the number of shares minted.
    """
    with atomic(session, "stake"):
        vault_state = get_active_vault_state(session, namespace)
        require_user_identity(caller)
        require_not_blacklisted(session, namespace, caller)
        if amount <= 0:
            raise ZeroAmount("Stake amount must be greater than zero")

        ledger = FungibleLedger(session)
        now = clock.now()
        balance = ledger.balance_of(vault_state.underlying_asset, caller)
        if balance < amount:
            raise InsufficientBalance(
                f"{caller} holds {balance} {vault_state.underlying_asset}, cannot stake {amount}"
            )

        total_shares = ledger.supply_of(vault_state.share_asset)
        custody_balance = ledger.balance_of(
            vault_state.underlying_asset, vault_state.custody_account
        )
        assets = total_assets(vault_state, custody_balance, int(now.timestamp()))
        shares = convert_to_shares(amount, total_shares, assets)
        if shares == 0:
            raise BelowMinShares(f"Stake of {amount} rounds down to zero shares")
        new_supply = checked_add(total_shares, shares)
        check_min_shares(vault_state, caller, new_supply)
        checked_add(custody_balance, amount)

        ledger.transfer(vault_state.underlying_asset, caller, vault_state.custody_account, amount)
        ledger.mint(vault_state.share_asset, caller, shares)
        record_transaction(session, namespace, TransactionKind.stake, caller, amount=amount, shares=shares)
        record_price_per_share(session, namespace, new_supply, assets + amount, now)

    logger.info(f"{caller} staked {amount} into {namespace} for {shares} shares")
    return shares
