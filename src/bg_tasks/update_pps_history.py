import logging

from sqlmodel import Session

from core.clock import Clock, system_clock
from core.db import engine
from log import setup_logging_to_file, setup_logging_to_seq
from models.pps_history import PricePerShareHistory
from services.history import record_price_per_share
from services.ledger import FungibleLedger
from services.registry import list_vault_states
from utils.calculate_price import total_assets

# # Initialize logger
logger = logging.getLogger("update_pps_history")
logger.setLevel(logging.INFO)


def snapshot_price_per_share(session: Session, clock: Clock = system_clock) -> list[PricePerShareHistory]:
    """Record the current price per share of every provisioned vault.

    Vesting rewards move the price between operations, so this job keeps
    the history continuous when a vault sees no stakes or unstakes.
    """
    now = clock.now()
    ledger = FungibleLedger(session)
    snapshots = []
    for vault_state in list_vault_states(session, initialized_only=True):
        try:
            total_shares = ledger.supply_of(vault_state.share_asset)
            custody_balance = ledger.balance_of(
                vault_state.underlying_asset, vault_state.custody_account
            )
            assets = total_assets(vault_state, custody_balance, int(now.timestamp()))
            snapshots.append(
                record_price_per_share(session, vault_state.namespace, total_shares, assets, now)
            )
            logger.info(
                f"Vault {vault_state.namespace}: {total_shares} shares, {assets} assets"
            )
        except Exception as e:
            logger.error(
                "An error occurred while snapshotting vault %s: %s",
                vault_state.namespace,
                e,
                exc_info=True,
            )

    session.commit()
    return snapshots


def main():
    with Session(engine) as session:
        logger.info("Starting price per share snapshot job...")
        snapshots = snapshot_price_per_share(session)
        logger.info(f"Price per share snapshot job completed, {len(snapshots)} vaults recorded.")


if __name__ == "__main__":
    setup_logging_to_file(app="update_pps_history", level=logging.INFO, logger=logger)
    setup_logging_to_seq(level=logging.INFO)

    main()
