"""Transaction engine: applies inbound transactions to account balances."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import (
    CREDIT_TYPES,
    DEBIT_TYPES,
    AppliedTransaction,
    Transaction,
    TransactionRequest,
)
from ledgerkit.domain.errors import InvalidTransactionTypeError, invalid_transaction_type
from ledgerkit.domain.validation import TRANSACTION_RULES, validate, validate_id
from ledgerkit.utils.amount_parser import parse_amount
from ledgerkit.utils.date_parser import day_range

logger = logging.getLogger(__name__)

RequestLike = Union[TransactionRequest, Mapping[str, Any]]


def signed_delta(amount: Decimal, transaction_type: str) -> Decimal:
    """Return the balance change for a positive amount and a type.

    Raises:
        InvalidTransactionTypeError: If the type has no direction
    """
    if transaction_type in CREDIT_TYPES:
        return amount
    if transaction_type in DEBIT_TYPES:
        return -amount
    raise InvalidTransactionTypeError(invalid_transaction_type(transaction_type))


class TransactionEngine:
    """Applies one transaction request to one account, all-or-nothing.

    The engine keeps no state between calls besides the database handle, so
    one instance may be shared by concurrent callers.
    """

    def __init__(self, db: Database):
        """Initialize transaction engine.

        Args:
            db: Database instance
        """
        self.db = db

    def prepare(self, account_id: int, request: RequestLike) -> tuple[Transaction, Decimal]:
        """Validate and normalize a request without touching storage.

        Returns:
            (transaction to append, signed balance delta)

        Raises:
            ValidationFailedError: If required fields are missing or out of range
            InvalidAmountError: If the amount is not a number
            AmountMustBePositiveError: If the amount is not above zero
            InvalidTransactionTypeError: If the type has no direction
        """
        if not isinstance(request, TransactionRequest):
            request = TransactionRequest.from_mapping(dict(request))

        validate(request.as_dict(), TRANSACTION_RULES)
        amount = parse_amount(request.amount)
        delta = signed_delta(amount, request.type)

        transaction = Transaction(
            id=request.id,
            account_id=account_id,
            amount=amount,
            source=request.source,
            type=request.type,
        )
        return transaction, delta

    def apply(self, account_id: int, request: RequestLike) -> AppliedTransaction:
        """Apply a transaction to an account.

        The ledger append and the balance update commit together or not at
        all. The account row is locked for the duration of the unit of work.

        Args:
            account_id: Target account ID
            request: TransactionRequest or mapping with id, amount, source, type

        Returns:
            The committed transaction and the account after the change

        Raises:
            ValidationFailedError, InvalidAmountError, AmountMustBePositiveError,
            InvalidTransactionTypeError: On bad input
            AccountNotFoundError: If the account does not exist
            DuplicateTransactionError: If the transaction id was already applied
            InsufficientBalanceError: If a debit exceeds the balance
            BalanceLimitExceededError: If a credit would exceed the largest storable balance
            StorageError: If the storage layer failed; nothing was committed
        """
        account_id = validate_id(account_id)
        transaction, delta = self.prepare(account_id, request)

        try:
            with self.db.unit_of_work() as uow:
                uow.accounts.get(account_id, for_update=True)
                committed = uow.ledger.append(transaction)
                account = uow.accounts.apply_delta(account_id, delta)
        except Exception as e:
            logger.info(
                "Rejected transaction %s on account %s: %s",
                transaction.id,
                account_id,
                e,
                extra={"action": "reject", "transaction_id": transaction.id, "account_id": account_id},
            )
            raise

        logger.info(
            "Applied %s %s (%s) to account %s, balance now %s",
            committed.type,
            committed.amount,
            committed.id,
            account_id,
            account.balance,
            extra={"action": "apply", "transaction_id": committed.id, "account_id": account_id},
        )
        return AppliedTransaction(transaction=committed, account=account)

    def apply_for_user(
        self, user_id: int, request: RequestLike, currency: Optional[str] = None
    ) -> AppliedTransaction:
        """Resolve the user's account, then apply the request to it.

        Raises:
            AccountNotFoundError: If the user has no (matching) account
            Plus everything apply() raises
        """
        user_id = validate_id(user_id)
        with self.db.unit_of_work() as uow:
            account = uow.accounts.get_by_user(user_id, currency=currency)
        return self.apply(account.id, request)

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Get a committed transaction.

        Raises:
            TransactionNotFoundError: If no such transaction exists
        """
        with self.db.unit_of_work() as uow:
            return uow.ledger.get(transaction_id)

    def list_transactions(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Transaction]:
        """List committed transactions, oldest first.

        Args:
            account_id: Optional account filter
            start_date: Optional first day (inclusive)
            end_date: Optional last day (inclusive)
            limit: Optional maximum number of transactions
            offset: Number of transactions to skip

        Raises:
            ValueError: If start_date is after end_date
        """
        start, end = day_range(start_date, end_date)
        with self.db.unit_of_work() as uow:
            if account_id is not None:
                uow.accounts.get(account_id)
            return uow.ledger.list(
                account_id=account_id, start=start, end=end, limit=limit, offset=offset
            )
