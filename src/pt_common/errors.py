"""Unified error codes and custom exceptions.

Error code ranges:
  2xxx: Point ledger
  9xxx: System

Store/driver exceptions are NOT represented here: they propagate unchanged
so callers can tell "rejected" apart from "outcome unknown".
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 2xxx: Point ledger ---

class InsufficientBalanceError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient balance: required {required} points, available {available} points",
            422,
        )


class PointLimitExceededError(AppError):
    def __init__(self, requested: int, current: int, max_balance: int) -> None:
        super().__init__(
            2002,
            f"Point limit exceeded: {current} + {requested} > max {max_balance}",
            422,
        )


class InvalidAmountError(AppError):
    def __init__(self, amount: object) -> None:
        super().__init__(2003, f"Amount must be a positive integer, got {amount!r}", 422)


class InvalidTransactionTypeError(AppError):
    def __init__(self, kind: object) -> None:
        super().__init__(2004, f"Invalid transaction type: {kind!r}", 422)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class LockTimeoutError(AppError):
    def __init__(self, user_id: int, timeout: float) -> None:
        super().__init__(
            9003,
            f"Timed out after {timeout}s waiting for transaction lock (user {user_id})",
            503,
        )
