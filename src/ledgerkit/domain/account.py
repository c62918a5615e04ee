"""Account domain service."""

from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import DEFAULT_CURRENCY, Account as AccountEntity, UserBalance
from ledgerkit.domain.validation import ACCOUNT_RULES, validate, validate_id


class AccountService:
    """Service for opening and reading accounts.

    Balances are only ever changed by the TransactionEngine.
    """

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def open_account(self, user_id: int, currency: str = DEFAULT_CURRENCY) -> AccountEntity:
        """Open a zero-balance account for a user.

        Args:
            user_id: Owning user ID
            currency: One of USD, EUR, GBP

        Returns:
            Account entity

        Raises:
            ValidationFailedError: If currency is not supported
            UserNotFoundError: If the user does not exist
            DuplicateAccountError: If the user already has an account in currency
        """
        user_id = validate_id(user_id)
        validate({"currency": currency}, ACCOUNT_RULES)
        with self.db.unit_of_work() as uow:
            return uow.accounts.create(user_id=user_id, currency=currency)

    def get_account(self, account_id: int) -> AccountEntity:
        """Get account by ID.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        account_id = validate_id(account_id)
        with self.db.unit_of_work() as uow:
            return uow.accounts.get(account_id)

    def get_account_by_user(self, user_id: int, currency: Optional[str] = None) -> AccountEntity:
        """Get a user's account.

        Args:
            user_id: User ID
            currency: Optional currency; the user's first account if omitted

        Raises:
            AccountNotFoundError: If the user has no matching account
        """
        user_id = validate_id(user_id)
        with self.db.unit_of_work() as uow:
            return uow.accounts.get_by_user(user_id, currency=currency)

    def list_accounts(self, user_id: Optional[int] = None) -> list[AccountEntity]:
        """List accounts, optionally for one user."""
        if user_id is not None:
            user_id = validate_id(user_id)
        with self.db.unit_of_work() as uow:
            return uow.accounts.list(user_id=user_id)

    def get_balance(self, user_id: int, currency: Optional[str] = None) -> UserBalance:
        """Get the current balance of a user's account."""
        account = self.get_account_by_user(user_id, currency=currency)
        return UserBalance(
            user_id=account.user_id,
            account_id=account.id,
            currency=account.currency,
            balance=account.balance,
        )
