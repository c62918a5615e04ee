"""Tests for domain entities and mappers."""

from dataclasses import FrozenInstanceError
from datetime import datetime
from decimal import Decimal

import pytest

from ledgerkit.database.mappers import account_to_domain, transaction_to_domain
from ledgerkit.database.models import Account as ORMAccount, Transaction as ORMTransaction
from ledgerkit.domain.entities import Account, AppliedTransaction, Transaction, TransactionRequest


def test_entities_are_immutable():
    txn = Transaction(id="a", account_id=1, amount=Decimal("1.00"), source="game", type="win")
    with pytest.raises(FrozenInstanceError):
        txn.amount = Decimal("2.00")


def test_request_from_mapping_fills_missing_fields():
    req = TransactionRequest.from_mapping({"transaction_id": "t-9", "amount": 5, "type": "win"})
    assert req == TransactionRequest(id="t-9", amount="5", source="", type="win")


def test_applied_transaction_payload():
    account = Account(
        id=3, user_id=1, balance=Decimal("7.5"), currency="EUR", status="active",
        created_at=datetime(2024, 1, 1),
    )
    txn = Transaction(id="t", account_id=3, amount=Decimal("2.5"), source="payment", type="lose")

    payload = AppliedTransaction(transaction=txn, account=account).to_dict()

    assert payload == {
        "transaction_id": "t",
        "account_id": 3,
        "new_balance": "7.50",
        "amount": "2.50",
        "type": "lose",
        "source": "payment",
    }


def test_account_mapper_quantizes_balance():
    orm = ORMAccount(
        id=1, user_id=2, balance=12.1, currency="GBP", status="active",
        created_at=datetime(2024, 1, 1),
    )
    account = account_to_domain(orm)
    assert account.balance == Decimal("12.10")
    assert str(account.balance) == "12.10"
    assert account.currency == "GBP"


def test_transaction_mapper():
    orm = ORMTransaction(
        id="x1", account_id=4, amount=Decimal("3"), source="server", type="win",
        inserted_at=datetime(2024, 3, 1, 10, 0),
    )
    txn = transaction_to_domain(orm)
    assert txn == Transaction(
        id="x1", account_id=4, amount=Decimal("3.00"), source="server", type="win",
        inserted_at=datetime(2024, 3, 1, 10, 0),
    )
