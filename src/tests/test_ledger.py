import pytest

from core.constants import MAX_AMOUNT
from core.errors import ArithmeticOverflow, InsufficientBalance, UnknownAsset, ZeroAmount
from helpers import ADMIN, ALICE, BOB, CAROL, INITIAL_BALANCE, UNDERLYING


def test_mint_increases_balance_and_supply(ledger):
    supply = ledger.supply_of(UNDERLYING)
    ledger.mint(UNDERLYING, ALICE, 500)

    assert ledger.balance_of(UNDERLYING, ALICE) == INITIAL_BALANCE + 500
    assert ledger.supply_of(UNDERLYING) == supply + 500


def test_transfer_moves_balance(ledger):
    ledger.transfer(UNDERLYING, ALICE, "dave", 250)

    assert ledger.balance_of(UNDERLYING, ALICE) == INITIAL_BALANCE - 250
    assert ledger.balance_of(UNDERLYING, "dave") == 250


def test_transfer_insufficient_balance_changes_nothing(ledger):
    with pytest.raises(InsufficientBalance):
        ledger.transfer(UNDERLYING, ALICE, BOB, INITIAL_BALANCE + 1)

    assert ledger.balance_of(UNDERLYING, ALICE) == INITIAL_BALANCE
    assert ledger.balance_of(UNDERLYING, BOB) == INITIAL_BALANCE


def test_burn_reduces_supply(ledger):
    supply = ledger.supply_of(UNDERLYING)
    ledger.burn(UNDERLYING, BOB, 1000)

    assert ledger.balance_of(UNDERLYING, BOB) == INITIAL_BALANCE - 1000
    assert ledger.supply_of(UNDERLYING) == supply - 1000


def test_burn_from_empty_account(ledger):
    with pytest.raises(InsufficientBalance):
        ledger.burn(UNDERLYING, "nobody", 1)


@pytest.mark.parametrize("amount", [0, -5])
def test_non_positive_amounts_are_rejected(ledger, amount):
    with pytest.raises(ZeroAmount):
        ledger.mint(UNDERLYING, ALICE, amount)
    with pytest.raises(ZeroAmount):
        ledger.transfer(UNDERLYING, ALICE, BOB, amount)


def test_unknown_asset(ledger):
    with pytest.raises(UnknownAsset):
        ledger.mint("nope", ALICE, 1)
    assert ledger.balance_of("nope", ALICE) == 0


def test_mint_past_max_amount_overflows(ledger):
    ledger.create_asset("big")
    ledger.mint("big", ALICE, MAX_AMOUNT)

    with pytest.raises(ArithmeticOverflow):
        ledger.mint("big", BOB, 1)
    assert ledger.supply_of("big") == MAX_AMOUNT


def test_holders_skip_empty_accounts(ledger):
    ledger.transfer(UNDERLYING, CAROL, ALICE, INITIAL_BALANCE)

    owners = {account.owner for account in ledger.holders(UNDERLYING)}
    assert owners == {ADMIN, ALICE, BOB}
