import logging

from sqlmodel import Session

from core.clock import Clock, system_clock
from core.db import atomic
from core.errors import InsufficientBalance, NoSharesOutstanding, ZeroAmount
from models.transaction import TransactionKind
from services.history import record_price_per_share, record_transaction
from services.ledger import FungibleLedger
from services.registry import get_active_vault_state
from services.roles import require_rewarder, require_user_identity
from utils.calculate_price import checked_add, total_assets, unvested_amount

logger = logging.getLogger(__name__)


def reward(
    session: Session,
    caller: str,
    amount: int,
    namespace: str,
    clock: Clock = system_clock,
) -> int:
    """Move ``amount`` of the underlying into custody without minting shares.

    The reward raises the price of every outstanding share. With a vesting
    period configured it is realised linearly over that period; any reward
    still vesting is rolled into the new one. Returns the new custody balance.
    """
    with atomic(session, "reward"):
        vault_state = get_active_vault_state(session, namespace)
        require_user_identity(caller)
        require_rewarder(session, vault_state, caller)
        if amount <= 0:
            raise ZeroAmount("Reward amount must be greater than zero")

        ledger = FungibleLedger(session)
        total_shares = ledger.supply_of(vault_state.share_asset)
        if total_shares == 0:
            raise NoSharesOutstanding(f"No shares outstanding in {namespace}")
        balance = ledger.balance_of(vault_state.underlying_asset, caller)
        if balance < amount:
            raise InsufficientBalance(
                f"{caller} holds {balance} {vault_state.underlying_asset}, cannot reward {amount}"
            )
        custody_balance = ledger.balance_of(
            vault_state.underlying_asset, vault_state.custody_account
        )
        new_custody_balance = checked_add(custody_balance, amount)

        now = clock.now()
        timestamp = int(now.timestamp())
        ledger.transfer(vault_state.underlying_asset, caller, vault_state.custody_account, amount)
        if vault_state.vesting_duration > 0:
            vault_state.vesting_amount = checked_add(
                unvested_amount(vault_state, timestamp), amount
            )
        else:
            vault_state.vesting_amount = 0
        vault_state.last_distribution_at = timestamp
        session.add(vault_state)
        record_transaction(session, namespace, TransactionKind.reward, caller, amount=amount)
        record_price_per_share(
            session,
            namespace,
            total_shares,
            total_assets(vault_state, new_custody_balance, timestamp),
            now,
        )

    logger.info(f"{caller} rewarded {amount} to {namespace}, custody now {new_custody_balance}")
    return new_custody_balance
