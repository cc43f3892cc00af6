from .vault_state import (
    VaultInfo,
    InitializeVaultRequest,
    DurationRequest,
    IdentityRequest,
    TransferAdminRequest,
    RoleChange,
)
from .position import (
    NoUnstakeRequest,
    PendingUnstakeRequest,
    UnstakeState,
    UserAssets,
    AmountRequest,
    TransferSharesRequest,
    StakeResult,
    UnstakeResult,
    RewardResult,
)
from .pps_history import PricePerShareHistory
