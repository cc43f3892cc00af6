from fastapi import APIRouter

import schemas
from api.api_v1.deps import CallerDep, ClockDep, SessionDep
from services import queries
from services.reward import reward
from services.stake import stake
from services.transfer import transfer_shares
from services.unstake import start_unstake, unstake

router = APIRouter()


@router.post("/{namespace}/stake", response_model=schemas.StakeResult)
async def stake_into_vault(
    session: SessionDep,
    clock: ClockDep,
    caller: CallerDep,
    namespace: str,
    body: schemas.AmountRequest,
):
    shares = stake(session, caller, namespace, body.amount, clock)
    return schemas.StakeResult(shares=shares)


@router.post("/{namespace}/start-unstake", response_model=schemas.UserAssets)
async def start_unstake_from_vault(
    session: SessionDep,
    clock: ClockDep,
    caller: CallerDep,
    namespace: str,
    body: schemas.AmountRequest,
):
    start_unstake(session, caller, namespace, body.amount, clock)
    return queries.get_user_assets(session, namespace, caller, clock)


@router.post("/{namespace}/unstake", response_model=schemas.UnstakeResult)
async def unstake_from_vault(
    session: SessionDep,
    clock: ClockDep,
    caller: CallerDep,
    namespace: str,
    body: schemas.AmountRequest,
):
    released = unstake(session, caller, namespace, body.amount, clock)
    return schemas.UnstakeResult(released=released)


@router.post("/{namespace}/reward", response_model=schemas.RewardResult)
async def reward_vault(
    session: SessionDep,
    clock: ClockDep,
    caller: CallerDep,
    namespace: str,
    body: schemas.AmountRequest,
):
    custody_balance = reward(session, caller, body.amount, namespace, clock)
    return schemas.RewardResult(custody_balance=custody_balance)


@router.post("/{namespace}/transfer", response_model=schemas.UserAssets)
async def transfer_vault_shares(
    session: SessionDep,
    clock: ClockDep,
    caller: CallerDep,
    namespace: str,
    body: schemas.TransferSharesRequest,
):
    transfer_shares(session, caller, namespace, body.destination, body.amount)
    return queries.get_user_assets(session, namespace, caller, clock)


@router.get("/{namespace}/positions/{owner}", response_model=schemas.UserAssets)
async def get_position(session: SessionDep, clock: ClockDep, namespace: str, owner: str):
    return queries.get_user_assets(session, namespace, owner, clock)
