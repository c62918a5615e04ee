"""Tests for the user and account services."""

from decimal import Decimal

import pytest

from ledgerkit.domain.errors import (
    AccountNotFoundError,
    DuplicateAccountError,
    DuplicateUserError,
    InvalidIdError,
    UserNotFoundError,
    ValidationFailedError,
)
from ledgerkit.domain.user import DEFAULT_USERS


class TestUserService:
    def test_register_creates_user_and_account(self, user_service, account_service):
        user, account = user_service.register(
            username="erin", full_name="Erin Example", email="erin@example.com", currency="GBP"
        )

        assert user.username == "erin"
        assert account.user_id == user.id
        assert account.currency == "GBP"
        assert account.balance == Decimal("0.00")
        assert account_service.get_account_by_user(user.id).id == account.id

    def test_register_strips_whitespace(self, user_service):
        user, _ = user_service.register(
            username=" erin ", full_name=" Erin ", email=" erin@example.com "
        )
        assert user.username == "erin"
        assert user.email == "erin@example.com"

    def test_register_validates_fields(self, user_service):
        with pytest.raises(ValidationFailedError) as exc_info:
            user_service.register(username="", full_name="", email="not-an-email")

        assert exc_info.value.errors == {
            "username": "The username field is required",
            "full_name": "The full_name field is required",
            "email": "The email must be a valid email address",
        }

    def test_register_rejects_unknown_currency(self, user_service):
        with pytest.raises(ValidationFailedError):
            user_service.register(username="erin", full_name="Erin", email="e@example.com", currency="JPY")

    def test_register_duplicate_leaves_no_account(self, user_service, account_service, sample_user):
        with pytest.raises(DuplicateUserError):
            user_service.register(username="alice", full_name="Alice", email="alice2@example.com")

        assert len(account_service.list_accounts()) == 1

    def test_get_user(self, user_service, sample_user):
        assert user_service.get_user(sample_user.id) == sample_user
        assert user_service.get_user(str(sample_user.id)) == sample_user

    def test_get_user_missing(self, user_service):
        with pytest.raises(UserNotFoundError):
            user_service.get_user(404)

    def test_get_user_invalid_id(self, user_service):
        with pytest.raises(InvalidIdError):
            user_service.get_user("abc")

    def test_seed_default_users(self, user_service, account_service):
        created = user_service.seed_default_users()

        assert [u.username for u in created] == [name for name, _, _ in DEFAULT_USERS]
        for user in created:
            assert account_service.get_balance(user.id).balance == Decimal("0.00")

        # Seeding again is a no-op
        assert user_service.seed_default_users() == []


class TestAccountService:
    def test_open_second_currency(self, account_service, sample_user):
        account = account_service.open_account(sample_user.id, currency="USD")

        assert account.currency == "USD"
        assert {a.currency for a in account_service.list_accounts(user_id=sample_user.id)} == {
            "EUR",
            "USD",
        }

    def test_open_duplicate_currency(self, account_service, sample_user):
        with pytest.raises(DuplicateAccountError):
            account_service.open_account(sample_user.id, currency="EUR")

    def test_open_for_missing_user(self, account_service):
        with pytest.raises(UserNotFoundError):
            account_service.open_account(77, currency="EUR")

    def test_open_unsupported_currency(self, account_service, sample_user):
        with pytest.raises(ValidationFailedError) as exc_info:
            account_service.open_account(sample_user.id, currency="CHF")
        assert "currency" in exc_info.value.errors

    def test_get_account_missing(self, account_service):
        with pytest.raises(AccountNotFoundError):
            account_service.get_account(12)

    def test_get_balance(self, account_service, sample_user, sample_account, fund):
        fund(sample_account.id, "19.90")

        balance = account_service.get_balance(sample_user.id)

        assert balance.balance == Decimal("19.90")
        assert balance.to_dict() == {
            "user_id": sample_user.id,
            "account_id": sample_account.id,
            "currency": "EUR",
            "balance": "19.90",
        }

    def test_get_balance_without_account(self, account_service):
        with pytest.raises(AccountNotFoundError):
            account_service.get_balance(3)
