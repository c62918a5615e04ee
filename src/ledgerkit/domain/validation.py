"""Declarative field validation.

Each rule table maps a field name to the rules checked against it, in order.
Only the first failing rule per field is reported.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ledgerkit.domain.entities import CURRENCIES, SOURCES, TRANSACTION_TYPES
from ledgerkit.domain.errors import InvalidIdError, ValidationFailedError, invalid_id

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class Rule:
    """A single validation rule.

    Attributes:
        name: Rule kind ("required", "oneof", "email", "max")
        param: Rule parameter (allowed values for "oneof", length for "max")
        message: Message template; ``{field}`` and ``{param}`` are substituted
    """

    name: str
    param: Any = None
    message: Optional[str] = None

    def render(self, field: str) -> str:
        template = self.message or DEFAULT_MESSAGES[self.name]
        param = self.param
        if isinstance(param, (tuple, list)):
            param = " ".join(param)
        return template.format(field=field, param=param)


DEFAULT_MESSAGES = {
    "required": "The {field} field is required",
    "oneof": "The {field} must be one of: {param}",
    "email": "The {field} must be a valid email address",
    "max": "The {field} must be at most {param} characters long",
}


def required() -> Rule:
    return Rule("required")


def oneof(*values: str) -> Rule:
    return Rule("oneof", tuple(values))


def email() -> Rule:
    return Rule("email")


def max_length(length: int) -> Rule:
    return Rule("max", length)


TRANSACTION_RULES: dict[str, Sequence[Rule]] = {
    "id": (required(), max_length(255)),
    "amount": (required(),),
    "source": (required(), oneof(*SOURCES)),
    "type": (required(), oneof(*TRANSACTION_TYPES)),
}

USER_RULES: dict[str, Sequence[Rule]] = {
    "username": (required(), max_length(255)),
    "full_name": (required(), max_length(255)),
    "email": (required(), email(), max_length(255)),
}

ACCOUNT_RULES: dict[str, Sequence[Rule]] = {
    "currency": (required(), oneof(*CURRENCIES)),
}


def _check(rule: Rule, value: Any) -> bool:
    text = "" if value is None else str(value)
    if rule.name == "required":
        return text.strip() != ""
    # Remaining rules only apply to values that are present
    if text == "":
        return True
    if rule.name == "oneof":
        return text in rule.param
    if rule.name == "email":
        return EMAIL_PATTERN.match(text) is not None
    if rule.name == "max":
        return len(text) <= rule.param
    raise ValueError(f"Unknown validation rule '{rule.name}'")


def collect_errors(
    data: Mapping[str, Any], rules: Mapping[str, Sequence[Rule]]
) -> dict[str, str]:
    """Evaluate a rule table against data.

    Args:
        data: Field values keyed by field name
        rules: Rule table

    Returns:
        Mapping of failing field name to message (empty if valid)
    """
    errors: dict[str, str] = {}
    for field, field_rules in rules.items():
        value = data.get(field)
        for rule in field_rules:
            if not _check(rule, value):
                errors[field] = rule.render(field)
                break
    return errors


def validate(data: Mapping[str, Any], rules: Mapping[str, Sequence[Rule]]) -> None:
    """Raise ValidationFailedError listing every failing field."""
    errors = collect_errors(data, rules)
    if errors:
        raise ValidationFailedError(errors)


def validate_id(value: str | int) -> int:
    """Parse an identifier that must be a positive integer.

    Raises:
        InvalidIdError: If value is not a positive integer
    """
    if isinstance(value, bool):
        raise InvalidIdError(invalid_id(value))
    if isinstance(value, int):
        parsed = value
    else:
        text = str(value).strip()
        if not text.isdigit():
            raise InvalidIdError(invalid_id(value))
        parsed = int(text)
    if parsed <= 0:
        raise InvalidIdError(invalid_id(value))
    return parsed
