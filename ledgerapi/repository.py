"""Persistence of accounts and transfers."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import BigInteger, Column, Integer, MetaData, String, Table, insert, select, update
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from ledgerapi.models import Account, MoneyError, money_to_json, parse_money

_metadata = MetaData()

_accounts = Table(
    "accounts",
    _metadata,
    Column("account_id", BigInteger, primary_key=True, autoincrement=False),
    Column("balance", String(64), nullable=False),
)

_transactions = Table(
    "transactions",
    _metadata,
    Column("id", Integer, primary_key=True),
    Column("source_account_id", BigInteger, nullable=False),
    Column("destination_account_id", BigInteger, nullable=False),
    Column("amount", String(64), nullable=False),
)


class RepositoryError(Exception):
    """Raised when a storage operation fails."""


def create_schema(engine: Engine) -> None:
    """Create the accounts and transactions tables if they are missing."""
    _metadata.create_all(engine)


class AccountRepository:
    """Stores and looks up accounts."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def create_account(self, account_id: int, initial_balance: str) -> None:
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    insert(_accounts).values(account_id=account_id, balance=initial_balance)
                )
        except SQLAlchemyError as exc:
            raise RepositoryError(str(exc)) from exc

    def get_account(self, account_id: int) -> Account:
        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    select(_accounts.c.account_id, _accounts.c.balance).where(
                        _accounts.c.account_id == account_id
                    )
                ).first()
        except SQLAlchemyError as exc:
            raise RepositoryError(str(exc)) from exc
        if row is None:
            raise RepositoryError(f"account {account_id} does not exist")
        return Account(account_id=int(row.account_id), balance=str(row.balance))


class TransactionRepository:
    """Moves money between accounts and records each transfer."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def submit_transaction(self, source_id: int, dest_id: int, amount: Decimal) -> None:
        """Transfer ``amount`` atomically; nothing changes if any step fails."""
        if amount <= 0:
            raise RepositoryError("amount must be positive")
        try:
            with self.engine.begin() as conn:
                source_balance = self._locked_balance(conn, source_id, "source")
                if source_balance < amount:
                    raise RepositoryError("insufficient funds")
                self._set_balance(conn, source_id, source_balance - amount)

                dest_balance = self._locked_balance(conn, dest_id, "destination")
                self._set_balance(conn, dest_id, dest_balance + amount)

                conn.execute(
                    insert(_transactions).values(
                        source_account_id=source_id,
                        destination_account_id=dest_id,
                        amount=money_to_json(amount),
                    )
                )
        except SQLAlchemyError as exc:
            raise RepositoryError(str(exc)) from exc

    @staticmethod
    def _locked_balance(conn: Connection, account_id: int, role: str) -> Decimal:
        row = conn.execute(
            select(_accounts.c.balance)
            .where(_accounts.c.account_id == account_id)
            .with_for_update()
        ).first()
        if row is None:
            raise RepositoryError(
                f"{role} account not found or error: account {account_id} does not exist"
            )
        try:
            return parse_money(str(row.balance))
        except MoneyError as exc:
            raise RepositoryError(f"invalid {role} account balance: {exc}") from exc

    @staticmethod
    def _set_balance(conn: Connection, account_id: int, balance: Decimal) -> None:
        conn.execute(
            update(_accounts)
            .where(_accounts.c.account_id == account_id)
            .values(balance=money_to_json(balance))
        )