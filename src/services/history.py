from datetime import datetime, timezone

from sqlmodel import Session, select

from models.pps_history import PricePerShareHistory
from models.transaction import Transaction, TransactionKind
from utils.calculate_price import price_per_share


def record_transaction(
    session: Session,
    namespace: str,
    kind: TransactionKind,
    actor: str,
    amount: int = 0,
    shares: int = 0,
    counterparty: str | None = None,
) -> Transaction:
    transaction = Transaction(
        namespace=namespace,
        kind=kind,
        actor=actor,
        counterparty=counterparty,
        amount=amount,
        shares=shares,
    )
    session.add(transaction)
    return transaction


def record_price_per_share(
    session: Session, namespace: str, total_shares: int, assets: int, at: datetime
) -> PricePerShareHistory:
    pps = PricePerShareHistory(
        namespace=namespace,
        datetime=at.astimezone(timezone.utc),
        price_per_share=price_per_share(total_shares, assets),
        total_assets=assets,
        total_shares=total_shares,
    )
    session.add(pps)
    return pps


def get_price_per_share_history(
    session: Session, namespace: str, limit: int | None = None
) -> list[PricePerShareHistory]:
    statement = (
        select(PricePerShareHistory)
        .where(PricePerShareHistory.namespace == namespace)
        .order_by(PricePerShareHistory.datetime.desc())
    )
    if limit is not None:
        statement = statement.limit(limit)
    return session.exec(statement).all()


def get_transactions(session: Session, namespace: str) -> list[Transaction]:
    return session.exec(
        select(Transaction)
        .where(Transaction.namespace == namespace)
        .order_by(Transaction.created_on)
    ).all()
