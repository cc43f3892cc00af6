import logging

from sqlmodel import Session, select

from core import constants
from core.db import atomic
from core.errors import Blacklisted, Unauthorized
from models.vault_state import BlacklistEntry, Rewarder, VaultState

logger = logging.getLogger(__name__)


def require_admin(vault_state: VaultState, caller: str) -> None:
    if caller != vault_state.admin:
        raise Unauthorized(f"{caller} is not the admin of {vault_state.namespace}")


def require_user_identity(*identities: str) -> None:
    for identity in identities:
        if constants.is_custody_identity(identity):
            raise Unauthorized(f"{identity} is reserved for vault custody")


def rewarder_set(session: Session, namespace: str) -> set[str]:
    return set(
        session.exec(select(Rewarder.identity).where(Rewarder.namespace == namespace)).all()
    )


def is_rewarder(session: Session, namespace: str, identity: str) -> bool:
    return session.get(Rewarder, (namespace, identity)) is not None


def require_rewarder(session: Session, vault_state: VaultState, caller: str) -> None:
    if not is_rewarder(session, vault_state.namespace, caller):
        raise Unauthorized(f"{caller} is not a rewarder of {vault_state.namespace}")


def is_blacklisted(session: Session, namespace: str, identity: str) -> bool:
    return session.get(BlacklistEntry, (namespace, identity)) is not None


def require_not_blacklisted(session: Session, namespace: str, *identities: str) -> None:
    for identity in identities:
        if is_blacklisted(session, namespace, identity):
            raise Blacklisted(f"{identity} is blacklisted in {namespace}")


def blacklist(session: Session, namespace: str) -> set[str]:
    return set(
        session.exec(
            select(BlacklistEntry.identity).where(BlacklistEntry.namespace == namespace)
        ).all()
    )


def _load_for_admin(session: Session, caller: str, namespace: str) -> VaultState:
    # imported here, registry depends on this module for require_admin
    from services.registry import get_vault_state

    vault_state = get_vault_state(session, namespace, for_update=True)
    require_admin(vault_state, caller)
    return vault_state


def add_rewarder(session: Session, caller: str, identity: str, namespace: str) -> bool:
    """Grant the rewarder role. Returns False when ``identity`` already had it."""
    with atomic(session, "add_rewarder"):
        _load_for_admin(session, caller, namespace)
        require_user_identity(identity)
        if is_rewarder(session, namespace, identity):
            added = False
        else:
            session.add(Rewarder(namespace=namespace, identity=identity))
            added = True

    logger.info(f"Rewarder {identity} {'added to' if added else 'already in'} {namespace}")
    return added


def remove_rewarder(session: Session, caller: str, identity: str, namespace: str) -> bool:
    """Revoke the rewarder role. Returns False when ``identity`` did not have it."""
    with atomic(session, "remove_rewarder"):
        _load_for_admin(session, caller, namespace)
        rewarder = session.get(Rewarder, (namespace, identity))
        if rewarder is not None:
            session.delete(rewarder)

    logger.info(f"Rewarder {identity} {'removed from' if rewarder else 'was not in'} {namespace}")
    return rewarder is not None


def add_to_blacklist(session: Session, caller: str, identity: str, namespace: str) -> bool:
    with atomic(session, "add_to_blacklist"):
        _load_for_admin(session, caller, namespace)
        if is_blacklisted(session, namespace, identity):
            added = False
        else:
            session.add(BlacklistEntry(namespace=namespace, identity=identity))
            added = True

    logger.info(f"{identity} {'blacklisted in' if added else 'already blacklisted in'} {namespace}")
    return added


def remove_from_blacklist(session: Session, caller: str, identity: str, namespace: str) -> bool:
    with atomic(session, "remove_from_blacklist"):
        _load_for_admin(session, caller, namespace)
        entry = session.get(BlacklistEntry, (namespace, identity))
        if entry is not None:
            session.delete(entry)

    logger.info(f"{identity} {'removed from' if entry else 'was not on'} the {namespace} blacklist")
    return entry is not None
