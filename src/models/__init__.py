from .ledger import Asset, TokenAccount
from .vault_state import VaultState, VaultStateBase, Rewarder, BlacklistEntry
from .unstake_request import UnstakeRequest
from .pps_history import PricePerShareHistory, PricePerShareHistoryBase
from .transaction import Transaction, TransactionKind
