from core.constants import MAX_AMOUNT
from core.errors import ArithmeticOverflow
from models.vault_state import VaultState


def unvested_amount(vault_state: VaultState, now: int) -> int:
    """Part of the last reward(s) not yet counted towards the share price.

    Rewards vest linearly over ``vesting_duration`` seconds starting at
    ``last_distribution_at``. With no vesting period everything is vested
    immediately.
    """
    duration = vault_state.vesting_duration
    if duration <= 0 or vault_state.vesting_amount <= 0:
        return 0
    elapsed = max(now - vault_state.last_distribution_at, 0)
    if elapsed >= duration:
        return 0
    return vault_state.vesting_amount * (duration - elapsed) // duration


def total_assets(vault_state: VaultState, custody_balance: int, now: int) -> int:
    unvested = unvested_amount(vault_state, now)
    if unvested > custody_balance:
        raise ArithmeticOverflow(
            f"Unvested rewards {unvested} exceed custody balance {custody_balance}"
        )
    return custody_balance - unvested


def convert_to_shares(amount: int, total_shares: int, assets: int) -> int:
    # first deposit is priced 1:1
    if total_shares == 0:
        return amount
    if assets <= 0:
        raise ArithmeticOverflow(
            f"{total_shares} shares outstanding against {assets} assets"
        )
    return amount * total_shares // assets


def convert_to_assets(shares: int, total_shares: int, assets: int) -> int:
    if total_shares == 0:
        return 0
    return shares * assets // total_shares


def price_per_share(total_shares: int, assets: int) -> float:
    if total_shares == 0:
        return 1.0
    return assets / total_shares


def checked_add(a: int, b: int) -> int:
    result = a + b
    if result > MAX_AMOUNT:
        raise ArithmeticOverflow(f"{a} + {b} exceeds {MAX_AMOUNT}")
    return result


def checked_sub(a: int, b: int) -> int:
    result = a - b
    if result < 0:
        raise ArithmeticOverflow(f"{a} - {b} underflows")
    return result
