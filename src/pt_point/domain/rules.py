"""Transaction validation rules. Pure functions, no I/O.

Every check here runs before any store write, so a raised AppError always
means nothing was mutated.
"""

from src.pt_common.enums import TransactionType
from src.pt_common.errors import (
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidTransactionTypeError,
    PointLimitExceededError,
)


def check_amount(amount: object) -> None:
    """Raise InvalidAmountError unless amount is a positive int."""
    # bool is an int subclass; True must not count as 1 point
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(amount)


def parse_transaction_type(kind: object) -> TransactionType:
    """Accept a TransactionType or its string value."""
    if isinstance(kind, TransactionType):
        return kind
    if isinstance(kind, str):
        try:
            return TransactionType(kind.upper())
        except ValueError:
            pass
    raise InvalidTransactionTypeError(kind)


def check_transaction(
    current: int, amount: int, kind: TransactionType, max_balance: int
) -> None:
    """Reject a transaction that would leave the balance outside [0, max_balance]."""
    if kind is TransactionType.CHARGE:
        if current + amount > max_balance:
            raise PointLimitExceededError(amount, current, max_balance)
    elif kind is TransactionType.USE:
        if current < amount:
            raise InsufficientBalanceError(amount, current)
    else:
        raise InvalidTransactionTypeError(kind)


def calculate_new_amount(current: int, amount: int, kind: TransactionType) -> int:
    if kind is TransactionType.CHARGE:
        return current + amount
    if kind is TransactionType.USE:
        return current - amount
    raise InvalidTransactionTypeError(kind)
