import logging

from sqlmodel import Session, select

from core import constants
from core.clock import Clock, system_clock
from core.config import settings
from core.db import atomic
from core.errors import (
    AccountsNotInitialized,
    AlreadyInitialized,
    InvalidDuration,
    InvalidMinShares,
    UnknownAsset,
    VaultNotFound,
)
from models.vault_state import VaultState
from services.ledger import FungibleLedger
from services.roles import require_admin, require_user_identity
from utils.calculate_price import unvested_amount

logger = logging.getLogger(__name__)


def get_vault_state(session: Session, namespace: str, for_update: bool = False) -> VaultState:
    statement = select(VaultState).where(VaultState.namespace == namespace)
    if for_update:
        statement = statement.with_for_update()
    vault_state = session.exec(statement).first()
    if vault_state is None:
        raise VaultNotFound(f"No vault state for namespace {namespace}")
    return vault_state


def get_active_vault_state(session: Session, namespace: str) -> VaultState:
    vault_state = get_vault_state(session, namespace, for_update=True)
    if not vault_state.accounts_initialized:
        raise AccountsNotInitialized(
            f"Program accounts for namespace {namespace} are not initialized"
        )
    return vault_state


def list_vault_states(session: Session, initialized_only: bool = False) -> list[VaultState]:
    statement = select(VaultState)
    if initialized_only:
        statement = statement.where(VaultState.accounts_initialized == True)  # noqa: E712
    return session.exec(statement.order_by(VaultState.created_at)).all()


def initialize_vault_state(
    session: Session,
    admin: str,
    namespace: str,
    min_shares: int,
    underlying_asset: str = settings.DEFAULT_UNDERLYING_ASSET,
) -> VaultState:
    with atomic(session, "initialize_vault_state"):
        require_user_identity(admin)
        if session.get(VaultState, namespace) is not None:
            raise AlreadyInitialized(f"Vault state for namespace {namespace} already exists")
        if min_shares < 0:
            raise InvalidMinShares(f"min_shares must not be negative, got {min_shares}")

        vault_state = VaultState(
            namespace=namespace,
            admin=admin,
            underlying_asset=underlying_asset,
            share_asset=constants.share_asset_id(namespace),
            custody_account=constants.custody_identity(namespace),
            cooldown_duration=0,
            vesting_duration=0,
            min_shares=min_shares,
        )
        session.add(vault_state)

    session.refresh(vault_state)
    logger.info(
        f"Vault state {namespace} initialized: admin={admin} underlying={underlying_asset} min_shares={min_shares}"
    )
    return vault_state


def initialize_program_accounts(session: Session, namespace: str) -> VaultState:
    with atomic(session, "initialize_program_accounts"):
        vault_state = get_vault_state(session, namespace, for_update=True)
        ledger = FungibleLedger(session)
        if vault_state.accounts_initialized or ledger.asset_exists(vault_state.share_asset):
            raise AlreadyInitialized(f"Program accounts for namespace {namespace} already exist")
        if not ledger.asset_exists(vault_state.underlying_asset):
            raise UnknownAsset(f"Underlying asset {vault_state.underlying_asset} is not registered")

        underlying = ledger.get_asset(vault_state.underlying_asset)
        ledger.create_asset(
            vault_state.share_asset,
            mint_authority=vault_state.custody_account,
            decimals=underlying.decimals,
        )
        ledger.open_account(vault_state.underlying_asset, vault_state.custody_account)
        ledger.open_account(vault_state.share_asset, vault_state.custody_account)
        vault_state.accounts_initialized = True
        session.add(vault_state)

    session.refresh(vault_state)
    logger.info(f"Program accounts for {namespace} initialized: share asset {vault_state.share_asset}")
    return vault_state


def _check_duration(duration: int, maximum: int) -> None:
    if duration < 0 or duration > maximum:
        raise InvalidDuration(f"Duration {duration}s is outside [0, {maximum}]")


def set_cooldown(session: Session, caller: str, namespace: str, duration: int) -> VaultState:
    with atomic(session, "set_cooldown"):
        vault_state = get_vault_state(session, namespace, for_update=True)
        require_admin(vault_state, caller)
        _check_duration(duration, constants.MAX_COOLDOWN_SECONDS)

        vault_state.cooldown_duration = duration
        session.add(vault_state)

    logger.info(f"Cooldown for {namespace} set to {duration}s by {caller}")
    return vault_state


def set_vesting_period(
    session: Session,
    caller: str,
    namespace: str,
    duration: int,
    clock: Clock = system_clock,
) -> VaultState:
    with atomic(session, "set_vesting_period"):
        vault_state = get_vault_state(session, namespace, for_update=True)
        require_admin(vault_state, caller)
        _check_duration(duration, constants.MAX_VESTING_SECONDS)

        now = clock.timestamp()
        unvested = unvested_amount(vault_state, now)
        # a zero period would realise the whole remaining vest in one step
        if duration == 0 and unvested > 0:
            raise InvalidDuration(
                f"{unvested} of the last reward is still vesting in {namespace}"
            )

        # restart the remaining vest under the new period so the price does not jump
        vault_state.vesting_amount = unvested
        vault_state.last_distribution_at = now
        vault_state.vesting_duration = duration
        session.add(vault_state)

    logger.info(f"Vesting period for {namespace} set to {duration}s by {caller}")
    return vault_state


def transfer_admin(session: Session, caller: str, new_admin: str, namespace: str) -> VaultState:
    with atomic(session, "transfer_admin"):
        vault_state = get_vault_state(session, namespace, for_update=True)
        require_admin(vault_state, caller)
        require_user_identity(new_admin)

        vault_state.admin = new_admin
        session.add(vault_state)

    logger.info(f"Admin of {namespace} transferred from {caller} to {new_admin}")
    return vault_state
