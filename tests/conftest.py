"""Shared pytest fixtures for ledgerkit tests."""

import os
import tempfile

import pytest

from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import TransactionRequest
from ledgerkit.domain.transaction import TransactionEngine
from ledgerkit.domain.user import UserService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # A file rather than :memory: so that concurrent connections share it
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path, lock_timeout=30.0)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def engine(temp_db):
    """Create a TransactionEngine with a temporary database."""
    return TransactionEngine(temp_db)


@pytest.fixture
def sample_user(user_service):
    """Register a sample user with an empty EUR account."""
    user, _ = user_service.register(
        username="alice", full_name="Alice Doe", email="alice@example.com"
    )
    return user


@pytest.fixture
def sample_account(account_service, sample_user):
    """Return the sample user's opening account (balance 0.00)."""
    return account_service.get_account_by_user(sample_user.id)


@pytest.fixture
def fund(engine):
    """Return a helper that credits an account through the engine."""
    counter = {"n": 0}

    def _fund(account_id: int, amount: str):
        counter["n"] += 1
        return engine.apply(
            account_id,
            TransactionRequest(
                id=f"fund-{account_id}-{counter['n']}", amount=amount, source="payment", type="win"
            ),
        )

    return _fund


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
