from sqlmodel import Session

from services.ledger import FungibleLedger
from services.registry import initialize_program_accounts, initialize_vault_state

ADMIN = "admin"
ALICE = "alice"
BOB = "bob"
CAROL = "carol"
NAMESPACE = "vault-1"
UNDERLYING = "usdx"
MIN_SHARES = 100
INITIAL_BALANCE = 1_000_000


def pool(ledger: FungibleLedger, vault_state) -> tuple[int, int]:
    """(share supply, custody balance)"""
    return (
        ledger.supply_of(vault_state.share_asset),
        ledger.balance_of(vault_state.underlying_asset, vault_state.custody_account),
    )


def fund_ledger(session: Session) -> FungibleLedger:
    ledger = FungibleLedger(session)
    ledger.create_asset(UNDERLYING, mint_authority=ADMIN, decimals=6)
    for user in (ADMIN, ALICE, BOB, CAROL):
        ledger.mint(UNDERLYING, user, INITIAL_BALANCE)
    session.commit()
    return ledger


def provision_vault(session: Session, namespace: str = NAMESPACE, min_shares: int = MIN_SHARES):
    initialize_vault_state(session, ADMIN, namespace, min_shares, underlying_asset=UNDERLYING)
    return initialize_program_accounts(session, namespace)
