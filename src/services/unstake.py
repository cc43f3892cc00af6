"""Two-phase withdrawal.

``start_unstake`` moves shares out of the owner's balance into the vault's
escrow and starts the cooldown. ``unstake`` burns locked shares once the
cooldown has elapsed and pays out the underlying at the price current at
claim time, so rewards injected during the cooldown still accrue to the
locked shares.
"""
import logging

from sqlmodel import Session

from core.clock import Clock, system_clock
from core.db import atomic
from core.errors import (
    CooldownNotElapsed,
    InsufficientShares,
    InsufficientUnderlying,
    NoPendingRequest,
    RequestAlreadyPending,
)
from models.transaction import TransactionKind
from models.unstake_request import UnstakeRequest
from services.history import record_price_per_share, record_transaction
from services.ledger import FungibleLedger
from services.registry import get_active_vault_state
from services.roles import require_not_blacklisted, require_user_identity
from services.stake import check_min_shares
from utils.calculate_price import checked_sub, convert_to_assets, total_assets

logger = logging.getLogger(__name__)


def get_unstake_request(session: Session, owner: str, namespace: str) -> UnstakeRequest | None:
    return session.get(UnstakeRequest, (owner, namespace))


def start_unstake(
    session: Session,
    caller: str,
    namespace: str,
    amount: int,
    clock: Clock = system_clock,
) -> UnstakeRequest:
    with atomic(session, "start_unstake"):
        vault_state = get_active_vault_state(session, namespace)
        require_user_identity(caller)
        require_not_blacklisted(session, namespace, caller)

        ledger = FungibleLedger(session)
        spendable = ledger.balance_of(vault_state.share_asset, caller)
        if amount <= 0 or amount > spendable:
            raise InsufficientShares(
                f"{caller} cannot lock {amount} shares, {spendable} spendable"
            )
        if get_unstake_request(session, caller, namespace) is not None:
            raise RequestAlreadyPending(
                f"{caller} already has a pending unstake request in {namespace}"
            )

        now = clock.timestamp()
        ledger.transfer(vault_state.share_asset, caller, vault_state.custody_account, amount)
        request = UnstakeRequest(
            owner=caller,
            namespace=namespace,
            locked_shares=amount,
            requested_at=now,
            ready_at=now + vault_state.cooldown_duration,
        )
        session.add(request)
        record_transaction(session, namespace, TransactionKind.start_unstake, caller, shares=amount)

    session.refresh(request)
    logger.info(
        f"{caller} locked {amount} shares in {namespace}, claimable at {request.ready_at}"
    )
    return request


def unstake(
    session: Session,
    caller: str,
    namespace: str,
    amount: int,
    clock: Clock = system_clock,
) -> int:
    """Claim ``amount`` locked shares. Returns the underlying released."""
    with atomic(session, "unstake"):
        vault_state = get_active_vault_state(session, namespace)
        require_user_identity(caller)
        require_not_blacklisted(session, namespace, caller)

        request = get_unstake_request(session, caller, namespace)
        if request is None:
            raise NoPendingRequest(f"{caller} has no pending unstake request in {namespace}")
        if amount <= 0 or amount > request.locked_shares:
            raise InsufficientShares(
                f"{caller} cannot claim {amount} shares, {request.locked_shares} locked"
            )
        now = clock.now()
        if int(now.timestamp()) < request.ready_at:
            raise CooldownNotElapsed(
                f"Request of {caller} in {namespace} is claimable at {request.ready_at}"
            )

        ledger = FungibleLedger(session)
        total_shares = ledger.supply_of(vault_state.share_asset)
        custody_balance = ledger.balance_of(
            vault_state.underlying_asset, vault_state.custody_account
        )
        assets = total_assets(vault_state, custody_balance, int(now.timestamp()))
        released = convert_to_assets(amount, total_shares, assets)
        new_supply = checked_sub(total_shares, amount)
        check_min_shares(vault_state, caller, new_supply)
        if released > custody_balance:
            raise InsufficientUnderlying(
                f"Vault holds {custody_balance}, cannot release {released}"
            )

        ledger.burn(vault_state.share_asset, vault_state.custody_account, amount)
        if released > 0:
            ledger.transfer(
                vault_state.underlying_asset, vault_state.custody_account, caller, released
            )
        request.locked_shares -= amount
        if request.locked_shares == 0:
            session.delete(request)
        else:
            session.add(request)
        record_transaction(
            session, namespace, TransactionKind.unstake, caller, amount=released, shares=amount
        )
        record_price_per_share(session, namespace, new_supply, assets - released, now)

    logger.info(f"{caller} unstaked {amount} shares from {namespace} for {released}")
    return released
