"""User domain service."""

import logging

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import DEFAULT_CURRENCY, Account, User
from ledgerkit.domain.validation import ACCOUNT_RULES, USER_RULES, validate, validate_id

logger = logging.getLogger(__name__)

# Users every fresh installation starts with, each with an empty EUR account
DEFAULT_USERS = [
    ("user1", "Test User 1", "user1@example.com"),
    ("user2", "Test User 2", "user2@example.com"),
    ("user3", "Test User 3", "user3@example.com"),
]


class UserService:
    """Service for registering and reading users."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def register(
        self, username: str, full_name: str, email: str, currency: str = DEFAULT_CURRENCY
    ) -> tuple[User, Account]:
        """Create a user together with its opening account.

        Both rows are written in one unit of work, so a user never exists
        without an account.

        Returns:
            (user, account)

        Raises:
            ValidationFailedError: If a field is missing or malformed
            DuplicateUserError: If username or email is taken
        """
        fields = {"username": username, "full_name": full_name, "email": email}
        validate(fields, USER_RULES)
        validate({"currency": currency}, ACCOUNT_RULES)

        with self.db.unit_of_work() as uow:
            user = uow.users.create(username=username.strip(), full_name=full_name.strip(), email=email.strip())
            account = uow.accounts.create(user_id=user.id, currency=currency)

        logger.info("Registered user %s (ID: %s)", user.username, user.id, extra={"user_id": user.id})
        return user, account

    def get_user(self, user_id: int) -> User:
        """Get user by ID.

        Raises:
            InvalidIdError: If user_id is not a positive integer
            UserNotFoundError: If the user does not exist
        """
        user_id = validate_id(user_id)
        with self.db.unit_of_work() as uow:
            return uow.users.get(user_id)

    def seed_default_users(self) -> list[User]:
        """Create the predefined users that do not exist yet.

        Returns:
            The users that were created
        """
        created = []
        for username, full_name, email in DEFAULT_USERS:
            with self.db.unit_of_work() as uow:
                if uow.users.find_by_username(username) is not None:
                    continue
            user, _ = self.register(username=username, full_name=full_name, email=email)
            created.append(user)
        return created
