from typing import List

from fastapi import APIRouter, Query

import schemas
from api.api_v1.deps import CallerDep, ClockDep, SessionDep
from core.config import settings
from services import history, queries, registry, roles

router = APIRouter()


@router.post("/", response_model=schemas.VaultInfo, status_code=201)
async def initialize_vault(
    session: SessionDep, clock: ClockDep, body: schemas.InitializeVaultRequest
):
    registry.initialize_vault_state(
        session,
        admin=body.admin,
        namespace=body.namespace,
        min_shares=body.min_shares,
        underlying_asset=body.underlying_asset or settings.DEFAULT_UNDERLYING_ASSET,
    )
    return queries.get_vault_info(session, body.namespace, clock)


@router.post("/{namespace}/accounts", response_model=schemas.VaultInfo)
async def initialize_program_accounts(session: SessionDep, clock: ClockDep, namespace: str):
    registry.initialize_program_accounts(session, namespace)
    return queries.get_vault_info(session, namespace, clock)


@router.get("/{namespace}", response_model=schemas.VaultInfo)
async def get_vault_info(session: SessionDep, clock: ClockDep, namespace: str):
    return queries.get_vault_info(session, namespace, clock)


@router.get("/{namespace}/pps-history", response_model=List[schemas.PricePerShareHistory])
async def get_pps_history(
    session: SessionDep,
    namespace: str,
    limit: int = Query(100, ge=1, le=1000),
):
    registry.get_vault_state(session, namespace)
    return history.get_price_per_share_history(session, namespace, limit)


@router.put("/{namespace}/cooldown", response_model=schemas.VaultInfo)
async def set_cooldown(
    session: SessionDep,
    clock: ClockDep,
    caller: CallerDep,
    namespace: str,
    body: schemas.DurationRequest,
):
    registry.set_cooldown(session, caller, namespace, body.duration)
    return queries.get_vault_info(session, namespace, clock)


@router.put("/{namespace}/vesting-period", response_model=schemas.VaultInfo)
async def set_vesting_period(
    session: SessionDep,
    clock: ClockDep,
    caller: CallerDep,
    namespace: str,
    body: schemas.DurationRequest,
):
    registry.set_vesting_period(session, caller, namespace, body.duration, clock)
    return queries.get_vault_info(session, namespace, clock)


@router.put("/{namespace}/admin", response_model=schemas.VaultInfo)
async def transfer_admin(
    session: SessionDep,
    clock: ClockDep,
    caller: CallerDep,
    namespace: str,
    body: schemas.TransferAdminRequest,
):
    registry.transfer_admin(session, caller, body.new_admin, namespace)
    return queries.get_vault_info(session, namespace, clock)


@router.post("/{namespace}/rewarders", response_model=schemas.RoleChange)
async def add_rewarder(
    session: SessionDep, caller: CallerDep, namespace: str, body: schemas.IdentityRequest
):
    changed = roles.add_rewarder(session, caller, body.identity, namespace)
    return schemas.RoleChange(identity=body.identity, changed=changed)


@router.delete("/{namespace}/rewarders/{identity}", response_model=schemas.RoleChange)
async def remove_rewarder(session: SessionDep, caller: CallerDep, namespace: str, identity: str):
    changed = roles.remove_rewarder(session, caller, identity, namespace)
    return schemas.RoleChange(identity=identity, changed=changed)


@router.post("/{namespace}/blacklist", response_model=schemas.RoleChange)
async def add_to_blacklist(
    session: SessionDep, caller: CallerDep, namespace: str, body: schemas.IdentityRequest
):
    changed = roles.add_to_blacklist(session, caller, body.identity, namespace)
    return schemas.RoleChange(identity=body.identity, changed=changed)


@router.delete("/{namespace}/blacklist/{identity}", response_model=schemas.RoleChange)
async def remove_from_blacklist(
    session: SessionDep, caller: CallerDep, namespace: str, identity: str
):
    changed = roles.remove_from_blacklist(session, caller, identity, namespace)
    return schemas.RoleChange(identity=identity, changed=changed)
