class VaultError(Exception):
    """Base class for every business rule rejection raised by the vault core.

    ``error_code`` is the stable taxonomy name surfaced to callers, and
    ``http_status`` is what the API layer answers with.
    """

    http_status = 400

    def __init__(self, error_message: str | None = None):
        self.error_code = type(self).__name__
        self.error_message = error_message or self.__doc__ or self.error_code
        super().__init__(self.error_message)


class Unauthorized(VaultError):
    """The caller lacks the admin or rewarder role"""

    http_status = 403


class AlreadyInitialized(VaultError):
    """The record already exists"""

    http_status = 409


class ZeroAmount(VaultError):
    """The amount must be greater than zero"""


class BelowMinShares(VaultError):
    """The operation would leave the share supply below the minimum"""


class InsufficientShares(VaultError):
    """Not enough spendable or locked shares"""


class InsufficientUnderlying(VaultError):
    """The vault does not hold enough of the underlying asset"""

    http_status = 500


class CooldownNotElapsed(VaultError):
    """Unstake cooldown has not passed"""


class NoPendingRequest(VaultError):
    """The caller has no pending unstake request"""

    http_status = 404


class RequestAlreadyPending(VaultError):
    """An unstake request is already pending"""

    http_status = 409


class ArithmeticOverflow(VaultError):
    """Bookkeeping overflow, an accounting invariant was violated"""

    http_status = 500


class InsufficientBalance(VaultError):
    """The ledger account balance is too low"""


class VaultNotFound(VaultError):
    """No vault state exists for this namespace"""

    http_status = 404


class AccountsNotInitialized(VaultError):
    """The share asset and custody accounts have not been provisioned"""


class UnknownAsset(VaultError):
    """The asset is not registered on the ledger"""

    http_status = 404


class InvalidDuration(VaultError):
    """The duration is negative or above the configured maximum"""


class Blacklisted(VaultError):
    """The user is prohibited from using this vault"""

    http_status = 403


class NoSharesOutstanding(VaultError):
    """There are no shares to accrue a reward to"""


class InvalidMinShares(VaultError):
    """The minimum shares floor must not be negative"""
