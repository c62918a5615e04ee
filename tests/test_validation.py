"""Tests for the declarative validation rules."""

import pytest

from ledgerkit.domain.errors import InvalidIdError, ValidationFailedError
from ledgerkit.domain.validation import (
    ACCOUNT_RULES,
    TRANSACTION_RULES,
    USER_RULES,
    Rule,
    collect_errors,
    validate,
    validate_id,
)


def valid_transaction(**overrides):
    data = {"id": "tx-1", "amount": "1.00", "source": "game", "type": "win"}
    data.update(overrides)
    return data


class TestTransactionRules:
    def test_valid(self):
        assert collect_errors(valid_transaction(), TRANSACTION_RULES) == {}

    @pytest.mark.parametrize("source", ["game", "server", "payment"])
    def test_sources(self, source):
        assert collect_errors(valid_transaction(source=source), TRANSACTION_RULES) == {}

    def test_blank_is_missing(self):
        errors = collect_errors(valid_transaction(id="   "), TRANSACTION_RULES)
        assert errors == {"id": "The id field is required"}

    def test_missing_key(self):
        data = valid_transaction()
        del data["type"]
        assert collect_errors(data, TRANSACTION_RULES) == {"type": "The type field is required"}

    def test_required_reported_before_oneof(self):
        errors = collect_errors(valid_transaction(source=""), TRANSACTION_RULES)
        assert errors["source"] == "The source field is required"

    def test_deposit_is_not_an_accepted_type(self):
        errors = collect_errors(valid_transaction(type="deposit"), TRANSACTION_RULES)
        assert errors == {"type": "The type must be one of: win lose"}

    def test_enum_is_case_sensitive(self):
        errors = collect_errors(valid_transaction(type="WIN"), TRANSACTION_RULES)
        assert "type" in errors

    def test_id_length(self):
        errors = collect_errors(valid_transaction(id="x" * 256), TRANSACTION_RULES)
        assert errors == {"id": "The id must be at most 255 characters long"}

    def test_validate_raises_with_all_fields(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            validate({}, TRANSACTION_RULES)
        assert set(exc_info.value.errors) == {"id", "amount", "source", "type"}
        assert "amount" in str(exc_info.value)


class TestUserRules:
    def test_valid(self):
        data = {"username": "bob", "full_name": "Bob", "email": "bob@example.com"}
        assert collect_errors(data, USER_RULES) == {}

    @pytest.mark.parametrize("email", ["bob", "bob@", "@example.com", "bob@example", "b ob@x.com"])
    def test_invalid_email(self, email):
        data = {"username": "bob", "full_name": "Bob", "email": email}
        assert collect_errors(data, USER_RULES) == {
            "email": "The email must be a valid email address"
        }


class TestAccountRules:
    @pytest.mark.parametrize("currency", ["USD", "EUR", "GBP"])
    def test_supported(self, currency):
        assert collect_errors({"currency": currency}, ACCOUNT_RULES) == {}

    def test_unsupported(self):
        assert collect_errors({"currency": "JPY"}, ACCOUNT_RULES) == {
            "currency": "The currency must be one of: USD EUR GBP"
        }


def test_custom_message():
    rules = {"name": (Rule("required", message="{field} please"),)}
    assert collect_errors({}, rules) == {"name": "name please"}


def test_unknown_rule():
    with pytest.raises(ValueError):
        collect_errors({"name": "x"}, {"name": (Rule("uuid"),)})


class TestValidateId:
    @pytest.mark.parametrize("value,expected", [(1, 1), ("42", 42), (" 7 ", 7)])
    def test_valid(self, value, expected):
        assert validate_id(value) == expected

    @pytest.mark.parametrize("value", [0, -1, "0", "-3", "abc", "", "1.5", True])
    def test_invalid(self, value):
        with pytest.raises(InvalidIdError):
            validate_id(value)
