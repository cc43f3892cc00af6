from core.config import settings

# Balances and supplies are stored in signed BIGINT columns
MAX_AMOUNT = 2**63 - 1

STAKING_TOKEN_SEED = "staking-token"
VAULT_TOKEN_ACCOUNT_SEED = "vault"

MAX_COOLDOWN_SECONDS = settings.MAX_COOLDOWN_SECONDS
MAX_VESTING_SECONDS = settings.MAX_VESTING_SECONDS

CALLER_HEADER = "X-Caller"


def share_asset_id(namespace: str) -> str:
    return f"{STAKING_TOKEN_SEED}:{namespace}"


def custody_identity(namespace: str) -> str:
    return f"{VAULT_TOKEN_ACCOUNT_SEED}:{namespace}"


def is_custody_identity(identity: str) -> bool:
    # every vault holds its pool under this prefix, whatever the namespace
    return identity.startswith(f"{VAULT_TOKEN_ACCOUNT_SEED}:")
