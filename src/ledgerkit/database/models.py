"""SQLAlchemy models for ledgerkit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the way every engine returns it."""
    return datetime.now(UTC).replace(tzinfo=None)


class User(Base):
    """User model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    accounts = relationship("Account", back_populates="user")


class Account(Base):
    """Monetary account model. One account per (user, currency)."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    balance = Column(Numeric(10, 2), nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="EUR")
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "currency", name="uq_account_user_currency"),
        CheckConstraint("balance >= 0", name="ck_account_balance_non_negative"),
        CheckConstraint("currency IN ('USD', 'EUR', 'GBP')", name="ck_account_currency"),
    )

    user = relationship("User", back_populates="accounts")
    transactions = relationship("Transaction", back_populates="account")


class Transaction(Base):
    """Applied transaction. The caller-supplied id is the primary key."""

    __tablename__ = "transactions"

    id = Column(String(255), primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    source = Column(String(20), nullable=False)
    type = Column(String(20), nullable=False)
    inserted_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transaction_amount_positive"),
        CheckConstraint("source IN ('game', 'server', 'payment')", name="ck_transaction_source"),
        CheckConstraint("type IN ('win', 'lose')", name="ck_transaction_type"),
    )

    account = relationship("Account", back_populates="transactions")


def _enable_sqlite_locking(engine: Engine) -> None:
    """Make every SQLite transaction take the write lock at BEGIN.

    pysqlite's own transaction handling is disabled so SQLAlchemy can emit
    BEGIN IMMEDIATE, which serializes read-modify-write units across
    connections the way SELECT ... FOR UPDATE does on other engines.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(database_url: str, lock_timeout: float = 30.0) -> Engine:
    """Create an engine, configuring SQLite for serialized writes."""
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=False,
            connect_args={"timeout": lock_timeout, "check_same_thread": False},
        )
        _enable_sqlite_locking(engine)
        return engine
    return create_engine(database_url, echo=False, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory, creating tables if needed."""
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
