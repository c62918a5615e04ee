"""Abstract database interface.

Every read and write goes through a unit of work: one storage transaction that
exposes the user, account and ledger stores bound to it. Leaving the unit of
work normally commits; leaving it with any exception rolls back.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid importing services through domain/__init__.py
from ledgerkit.domain.entities import Account, Transaction, User


class UserStore(ABC):
    """User records."""

    @abstractmethod
    def create(self, username: str, full_name: str, email: str) -> User:
        """Create a user. Raises DuplicateUserError on username/email clash."""
        pass

    @abstractmethod
    def get(self, user_id: int) -> User:
        """Get user by ID. Raises UserNotFoundError."""
        pass

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[User]:
        """Get user by username, or None."""
        pass


class AccountStore(ABC):
    """Authoritative holder of account balances."""

    @abstractmethod
    def create(self, user_id: int, currency: str) -> Account:
        """Create an account with zero balance.

        Raises:
            UserNotFoundError: If the user does not exist
            DuplicateAccountError: If the user already has an account in currency
        """
        pass

    @abstractmethod
    def get(self, account_id: int, for_update: bool = False) -> Account:
        """Get account by ID, optionally locking the row for this unit of work.

        Raises:
            AccountNotFoundError: If no such account exists
        """
        pass

    @abstractmethod
    def get_by_user(self, user_id: int, currency: Optional[str] = None) -> Account:
        """Get a user's account (the oldest one if currency is not given).

        Raises:
            AccountNotFoundError: If the user has no matching account
        """
        pass

    @abstractmethod
    def list(self, user_id: Optional[int] = None) -> list[Account]:
        """List accounts, optionally for one user."""
        pass

    @abstractmethod
    def apply_delta(self, account_id: int, signed_amount: Decimal) -> Account:
        """Add signed_amount to the locked balance without committing.

        Raises:
            AccountNotFoundError: If no such account exists
            InsufficientBalanceError: If the result would be negative
            BalanceLimitExceededError: If the result would exceed MAX_AMOUNT
        """
        pass


class TransactionLedger(ABC):
    """Append-only record of applied transactions."""

    @abstractmethod
    def append(self, transaction: Transaction) -> Transaction:
        """Persist a new ledger row keyed by transaction.id.

        Raises:
            DuplicateTransactionError: If the id already exists
        """
        pass

    @abstractmethod
    def get(self, transaction_id: str) -> Transaction:
        """Get transaction by ID. Raises TransactionNotFoundError."""
        pass

    @abstractmethod
    def list(
        self,
        account_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Transaction]:
        """List transactions oldest first.

        Args:
            account_id: Optional account filter
            start: Optional inclusive lower bound on inserted_at
            end: Optional exclusive upper bound on inserted_at
            limit: Optional maximum number of rows
            offset: Number of rows to skip
        """
        pass


class UnitOfWork(ABC):
    """Stores bound to one atomic storage transaction."""

    users: UserStore
    accounts: AccountStore
    ledger: TransactionLedger


class Database(ABC):
    """Abstract database interface for ledgerkit."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release all pooled connections."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager[UnitOfWork]:
        """Open an atomic unit of work.

        Usage:
            with db.unit_of_work() as uow:
                uow.ledger.append(txn)
                uow.accounts.apply_delta(txn.account_id, delta)

        Raises:
            StorageError: If the storage layer fails; the unit is rolled back
        """
        pass
