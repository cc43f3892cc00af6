import logging

from sqlmodel import Session

from core.db import atomic
from core.errors import InsufficientShares
from models.transaction import TransactionKind
from services.history import record_transaction
from services.ledger import FungibleLedger
from services.registry import get_active_vault_state
from services.roles import require_not_blacklisted, require_user_identity

logger = logging.getLogger(__name__)


def transfer_shares(
    session: Session, caller: str, namespace: str, destination: str, amount: int
) -> None:
    """Move spendable shares to another holder. Locked shares sit in escrow and cannot move."""
    with atomic(session, "transfer_shares"):
        vault_state = get_active_vault_state(session, namespace)
        require_user_identity(caller, destination)
        require_not_blacklisted(session, namespace, caller, destination)

        ledger = FungibleLedger(session)
        spendable = ledger.balance_of(vault_state.share_asset, caller)
        if amount <= 0 or amount > spendable:
            raise InsufficientShares(
                f"{caller} cannot transfer {amount} shares, {spendable} spendable"
            )

        ledger.transfer(vault_state.share_asset, caller, destination, amount)
        record_transaction(
            session,
            namespace,
            TransactionKind.transfer,
            caller,
            shares=amount,
            counterparty=destination,
        )

    logger.info(f"{caller} transferred {amount} {namespace} shares to {destination}")
