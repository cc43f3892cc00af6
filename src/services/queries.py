from sqlmodel import Session

import schemas
from core.clock import Clock, system_clock
from models.vault_state import VaultState
from services.ledger import FungibleLedger
from services.registry import get_vault_state
from services.roles import blacklist, is_blacklisted, rewarder_set
from services.unstake import get_unstake_request
from utils.calculate_price import (
    convert_to_assets,
    convert_to_shares,
    price_per_share,
    total_assets,
    unvested_amount,
)


def _pool(session: Session, vault_state: VaultState, now: int) -> tuple[int, int, int]:
    """Returns (total shares, custody balance, total assets)."""
    if not vault_state.accounts_initialized:
        return 0, 0, 0
    ledger = FungibleLedger(session)
    total_shares = ledger.supply_of(vault_state.share_asset)
    custody_balance = ledger.balance_of(vault_state.underlying_asset, vault_state.custody_account)
    return total_shares, custody_balance, total_assets(vault_state, custody_balance, now)


def _holder_count(session: Session, vault_state: VaultState) -> int:
    if not vault_state.accounts_initialized:
        return 0
    # escrowed shares sit with the custody account, which is not a holder
    holders = FungibleLedger(session).holders(vault_state.share_asset)
    return sum(1 for account in holders if account.owner != vault_state.custody_account)


def get_vault_info(
    session: Session, namespace: str, clock: Clock = system_clock
) -> schemas.VaultInfo:
    vault_state = get_vault_state(session, namespace)
    now = clock.timestamp()
    total_shares, custody_balance, assets = _pool(session, vault_state, now)

    info = schemas.VaultInfo.model_validate(vault_state)
    info.rewarders = sorted(rewarder_set(session, namespace))
    info.blacklist = sorted(blacklist(session, namespace))
    info.total_shares = total_shares
    info.holder_count = _holder_count(session, vault_state)
    info.custody_balance = custody_balance
    info.unvested_amount = unvested_amount(vault_state, now)
    info.total_assets = assets
    info.price_per_share = price_per_share(total_shares, assets)
    return info


def get_user_assets(
    session: Session, namespace: str, owner: str, clock: Clock = system_clock
) -> schemas.UserAssets:
    vault_state = get_vault_state(session, namespace)
    total_shares, _, assets = _pool(session, vault_state, clock.timestamp())

    ledger = FungibleLedger(session)
    shares = ledger.balance_of(vault_state.share_asset, owner)
    underlying_balance = ledger.balance_of(vault_state.underlying_asset, owner)
    request = get_unstake_request(session, owner, namespace)
    locked_shares = request.locked_shares if request is not None else 0

    return schemas.UserAssets(
        namespace=namespace,
        owner=owner,
        shares=shares,
        locked_shares=locked_shares,
        shares_value=convert_to_assets(shares, total_shares, assets),
        locked_value=convert_to_assets(locked_shares, total_shares, assets),
        underlying_balance=underlying_balance,
        blacklisted=is_blacklisted(session, namespace, owner),
        unstake=(
            schemas.PendingUnstakeRequest.model_validate(request)
            if request is not None
            else schemas.NoUnstakeRequest()
        ),
    )


def preview_stake(
    session: Session, namespace: str, amount: int, clock: Clock = system_clock
) -> int:
    vault_state = get_vault_state(session, namespace)
    total_shares, _, assets = _pool(session, vault_state, clock.timestamp())
    return convert_to_shares(amount, total_shares, assets)


def preview_unstake(
    session: Session, namespace: str, shares: int, clock: Clock = system_clock
) -> int:
    vault_state = get_vault_state(session, namespace)
    total_shares, _, assets = _pool(session, vault_state, clock.timestamp())
    return convert_to_assets(shares, total_shares, assets)
