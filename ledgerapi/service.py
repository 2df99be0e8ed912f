"""Application services sitting between handlers and repositories."""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from ledgerapi.models import Account


class _AccountStore(Protocol):
    def create_account(self, account_id: int, initial_balance: str) -> None: ...

    def get_account(self, account_id: int) -> Account: ...


class _TransferStore(Protocol):
    def submit_transaction(self, source_id: int, dest_id: int, amount: Decimal) -> None: ...


class AccountService:
    """Account operations backed by an account store."""

    def __init__(self, repo: _AccountStore) -> None:
        self.repo = repo

    def create_account(self, account_id: int, initial_balance: str) -> None:
        self.repo.create_account(account_id, initial_balance)

    def get_account(self, account_id: int) -> Account:
        return self.repo.get_account(account_id)


class TransactionService:
    """Transfer operations backed by a transfer store."""

    def __init__(self, repo: _TransferStore) -> None:
        self.repo = repo

    def submit_transaction(self, source_id: int, dest_id: int, amount: Decimal) -> None:
        self.repo.submit_transaction(source_id, dest_id, amount)