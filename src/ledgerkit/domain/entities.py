"""Domain model entities for ledgerkit.

These are pure data classes representing business concepts, independent of
database schema. Services and the CLI only ever see these; ORM rows are
converted at the database boundary.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ledgerkit.utils.amount_parser import format_amount

CURRENCIES = ("USD", "EUR", "GBP")
DEFAULT_CURRENCY = "EUR"

SOURCES = ("game", "server", "payment")
TRANSACTION_TYPES = ("win", "lose")

# Directional aliases accepted when computing a signed delta
CREDIT_TYPES = ("win", "deposit")
DEBIT_TYPES = ("lose", "withdrawal")

ACCOUNT_ACTIVE = "active"


@dataclass(frozen=True)
class User:
    """User domain entity."""

    id: int
    username: str
    full_name: str
    email: str
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Monetary account domain entity."""

    id: int
    user_id: int
    balance: Decimal
    currency: str
    status: str
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Applied ledger transaction.

    ``amount`` is always positive; ``type`` carries the direction.
    """

    id: str
    account_id: int
    amount: Decimal
    source: str
    type: str
    inserted_at: Optional[datetime] = None


@dataclass(frozen=True)
class TransactionRequest:
    """Raw inbound transaction fields as supplied by the caller."""

    id: str
    amount: str
    source: str
    type: str

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "TransactionRequest":
        """Build a request from a mapping, treating missing keys as empty."""
        return cls(
            id=_as_text(data.get("id", data.get("transaction_id"))),
            amount=_as_text(data.get("amount")),
            source=_as_text(data.get("source")),
            type=_as_text(data.get("type")),
        )

    def as_dict(self) -> dict[str, str]:
        return {"id": self.id, "amount": self.amount, "source": self.source, "type": self.type}


@dataclass(frozen=True)
class AppliedTransaction:
    """Result of a committed apply: the ledger row and the account after it."""

    transaction: Transaction
    account: Account

    @property
    def new_balance(self) -> Decimal:
        return self.account.balance

    def to_dict(self) -> dict[str, Any]:
        """Return the success payload with amounts as 2-decimal strings."""
        return {
            "transaction_id": self.transaction.id,
            "account_id": self.account.id,
            "new_balance": format_amount(self.account.balance),
            "amount": format_amount(self.transaction.amount),
            "type": self.transaction.type,
            "source": self.transaction.source,
        }


@dataclass(frozen=True)
class UserBalance:
    """Balance of a user's account."""

    user_id: int
    account_id: int
    currency: str
    balance: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "account_id": self.account_id,
            "currency": self.currency,
            "balance": format_amount(self.balance),
        }


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
