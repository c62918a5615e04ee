"""Shared domain error messages and error types."""

from decimal import Decimal
from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class BusinessRuleError(DomainError):
    """Operation rejected by a business rule rather than bad input."""


class ValidationFailedError(ValidationError):
    """One or more request fields are missing or out of range.

    Attributes:
        errors: Mapping of field name to a human readable message
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Validation failed for: {fields}")


class InvalidAmountError(ValidationError):
    """Amount string is empty or not a number."""


class AmountMustBePositiveError(ValidationError):
    """Amount parsed but is zero or negative."""


class InvalidTransactionTypeError(ValidationError):
    """Transaction type has no balance direction."""


class InvalidIdError(ValidationError):
    """Identifier is not a positive integer."""


class AccountNotFoundError(NotFoundError):
    pass


class UserNotFoundError(NotFoundError):
    pass


class TransactionNotFoundError(NotFoundError):
    pass


class InsufficientBalanceError(BusinessRuleError):
    """Applying the delta would drive the balance below zero."""


class BalanceLimitExceededError(BusinessRuleError):
    """Applying the delta would push the balance past what an account can hold."""


class DuplicateTransactionError(ConflictError):
    """Transaction id was already committed to the ledger."""


class DuplicateAccountError(ConflictError):
    pass


class DuplicateUserError(ConflictError):
    pass


class StorageError(Exception):
    """The storage layer failed before the unit of work could complete.

    Not a DomainError: the request itself may be fine and can be retried.
    """

    retryable = True


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def user_account_not_found(user_id: int, currency: Optional[str] = None) -> str:
    """Return message for a user without an account."""
    if currency is None:
        return f"User {user_id} has no account"
    return f"User {user_id} has no {currency} account"


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction '{transaction_id}' not found"


def duplicate_transaction(transaction_id: str) -> str:
    """Return message for a transaction id that was already applied."""
    return f"Transaction '{transaction_id}' already exists"


def duplicate_account(user_id: int, currency: str) -> str:
    """Return message for a second account in the same currency."""
    return f"User {user_id} already has a {currency} account"


def duplicate_user(username: str) -> str:
    """Return message for duplicate username or email."""
    return f"User '{username}' already exists (username or email taken)"


def insufficient_balance(account_id: int, balance: Decimal, amount: Decimal) -> str:
    """Return message when a debit exceeds the balance."""
    return (
        f"Insufficient balance on account {account_id}: "
        f"balance {balance:.2f}, requested {amount:.2f}"
    )


def balance_limit_exceeded(account_id: int, balance: Decimal, amount: Decimal, limit: Decimal) -> str:
    """Return message when a credit would overflow the balance."""
    return (
        f"Balance limit exceeded on account {account_id}: "
        f"balance {balance:.2f}, credit {amount:.2f}, limit {limit:.2f}"
    )


def invalid_transaction_type(transaction_type: str) -> str:
    """Return message for a type without balance direction."""
    return f"Invalid transaction type '{transaction_type}'"


def invalid_id(value: object) -> str:
    """Return message for a malformed identifier."""
    return f"Invalid ID '{value}': must be a positive integer"
