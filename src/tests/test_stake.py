import pytest
from sqlmodel import Session

from core.errors import BelowMinShares, InsufficientBalance, ZeroAmount
from helpers import ADMIN, ALICE, BOB, CAROL, INITIAL_BALANCE, NAMESPACE, pool
from models.transaction import TransactionKind
from services import roles
from services.history import get_price_per_share_history, get_transactions
from services.queries import preview_stake
from services.reward import reward
from services.stake import stake


def test_first_stake_mints_one_to_one(db_session: Session, vault, ledger, clock):
    shares = stake(db_session, ALICE, NAMESPACE, 5000, clock)

    assert shares == 5000
    assert ledger.balance_of(vault.share_asset, ALICE) == 5000
    assert ledger.balance_of(vault.underlying_asset, ALICE) == INITIAL_BALANCE - 5000
    assert pool(ledger, vault) == (5000, 5000)


def test_stake_at_current_price(db_session: Session, vault, ledger, clock):
    roles.add_rewarder(db_session, ADMIN, CAROL, NAMESPACE)
    stake(db_session, ALICE, NAMESPACE, 1000, clock)
    reward(db_session, CAROL, 500, NAMESPACE, clock)

    assert preview_stake(db_session, NAMESPACE, 3000, clock) == 2000
    shares = stake(db_session, BOB, NAMESPACE, 3000, clock)

    # 3000 * 1000 // 1500
    assert shares == 2000
    assert pool(ledger, vault) == (3000, 4500)


def test_stake_zero(db_session: Session, vault, ledger, clock):
    with pytest.raises(ZeroAmount):
        stake(db_session, ALICE, NAMESPACE, 0, clock)

    assert pool(ledger, vault) == (0, 0)


def test_first_stake_below_min_shares(db_session: Session, vault, ledger, clock):
    with pytest.raises(BelowMinShares):
        stake(db_session, ALICE, NAMESPACE, 99, clock)

    assert pool(ledger, vault) == (0, 0)
    assert ledger.balance_of(vault.underlying_asset, ALICE) == INITIAL_BALANCE
    assert get_transactions(db_session, NAMESPACE) == []


def test_first_stake_at_min_shares(db_session: Session, vault, ledger, clock):
    assert stake(db_session, ALICE, NAMESPACE, 100, clock) == 100


def test_admin_may_seed_below_min_shares(db_session: Session, vault, ledger, clock):
    assert stake(db_session, ADMIN, NAMESPACE, 1, clock) == 1
    assert stake(db_session, ALICE, NAMESPACE, 99999, clock) == 99999

    assert pool(ledger, vault) == (100000, 100000)


def test_stake_rounding_to_zero_shares(db_session: Session, vault, ledger, clock):
    roles.add_rewarder(db_session, ADMIN, CAROL, NAMESPACE)
    stake(db_session, ADMIN, NAMESPACE, 100, clock)
    reward(db_session, CAROL, 1000, NAMESPACE, clock)

    # 10 * 100 // 1100 == 0
    with pytest.raises(BelowMinShares):
        stake(db_session, BOB, NAMESPACE, 10, clock)
    assert pool(ledger, vault) == (100, 1100)
    assert ledger.balance_of(vault.underlying_asset, BOB) == INITIAL_BALANCE


def test_stake_more_than_balance(db_session: Session, vault, ledger, clock):
    with pytest.raises(InsufficientBalance):
        stake(db_session, ALICE, NAMESPACE, INITIAL_BALANCE + 1, clock)

    assert pool(ledger, vault) == (0, 0)


def test_stake_records_history(db_session: Session, vault, clock):
    stake(db_session, ALICE, NAMESPACE, 2500, clock)

    transactions = get_transactions(db_session, NAMESPACE)
    assert len(transactions) == 1
    assert transactions[0].kind == TransactionKind.stake
    assert transactions[0].actor == ALICE
    assert transactions[0].amount == 2500
    assert transactions[0].shares == 2500

    pps = get_price_per_share_history(db_session, NAMESPACE)
    assert len(pps) == 1
    assert pps[0].price_per_share == 1.0
    assert pps[0].total_shares == 2500
    assert pps[0].total_assets == 2500
