"""Mapper functions to convert SQLAlchemy models to domain entities.

Balances and amounts are re-quantized to cents on the way out because some
engines (SQLite) hand back Numeric values with arbitrary scale.
"""

from decimal import Decimal

from ledgerkit.domain import entities as domain
from ledgerkit.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
    User as ORMUser,
)

CENTS = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(value).quantize(CENTS)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        username=orm_user.username,
        full_name=orm_user.full_name,
        email=orm_user.email,
        created_at=orm_user.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        balance=_money(orm_account.balance),
        currency=orm_account.currency,
        status=orm_account.status,
        created_at=orm_account.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        amount=_money(orm_transaction.amount),
        source=orm_transaction.source,
        type=orm_transaction.type,
        inserted_at=orm_transaction.inserted_at,
    )
