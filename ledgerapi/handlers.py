"""HTTP request handlers for accounts and transfers."""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal
from http import HTTPStatus
from typing import Any, Protocol

from flask import Response, request

from ledgerapi.models import MoneyError, parse_money
from ledgerapi.responses import created, error_response, success_response
from ledgerapi.service import AccountService

_INVALID_JSON = "invalid request: could not decode JSON"
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_LEADING_FLOAT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")


class _TransferService(Protocol):
    def submit_transaction(self, source_id: int, dest_id: int, amount: Decimal) -> None: ...


class _DecodeError(ValueError):
    """The request body is not the JSON object the handler expects."""


def _reject_constant(name: str) -> Any:
    raise _DecodeError(f"invalid JSON constant {name}")


def _read_object() -> dict[str, Any]:
    text = request.get_data(as_text=True).lstrip()
    try:
        payload, _ = json.JSONDecoder(parse_constant=_reject_constant).raw_decode(text)
    except ValueError as exc:
        raise _DecodeError(str(exc)) from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise _DecodeError("expected a JSON object")
    return payload


def _int_field(body: dict[str, Any], key: str) -> int:
    value = body.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise _DecodeError(f"{key} must be an integer")
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise _DecodeError(f"{key} is out of range")
    return value


def _str_field(body: dict[str, Any], key: str) -> str:
    value = body.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _DecodeError(f"{key} must be a string")
    return value


def _money_field(body: dict[str, Any], key: str) -> Decimal:
    if key not in body:
        return Decimal(0)
    try:
        return parse_money(body[key])
    except MoneyError as exc:
        raise _DecodeError(str(exc)) from exc


def _scan_float(text: str) -> float | None:
    """Read the leading number of ``text`` the way a ``%f`` scan would."""
    match = _LEADING_FLOAT.match(text.lstrip())
    if match is None:
        return None
    value = float(match.group())
    return None if math.isinf(value) else value


def _parse_int64(text: str) -> int:
    if not _DECIMAL_INT.fullmatch(text):
        raise ValueError(f'parsing "{text}": invalid syntax')
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f'parsing "{text}": value out of range')
    return value


class AccountHandler:
    """Handles account creation and lookup requests."""

    def __init__(self, service: AccountService) -> None:
        self.service = service

    def create_account(self) -> Response:
        try:
            body = _read_object()
            account_id = _int_field(body, "account_id")
            initial_balance = _str_field(body, "initial_balance")
        except _DecodeError:
            return error_response(HTTPStatus.BAD_REQUEST, _INVALID_JSON)

        if account_id <= 0:
            return error_response(
                HTTPStatus.BAD_REQUEST, "account_id must be a positive integer"
            )
        if not initial_balance:
            return error_response(HTTPStatus.BAD_REQUEST, "initial_balance is required")

        balance = _scan_float(initial_balance)
        if balance is None or balance < 0:
            return error_response(
                HTTPStatus.BAD_REQUEST,
                "initial_balance must be a valid non-negative number",
            )

        try:
            self.service.create_account(account_id, initial_balance)
        except Exception as exc:
            return error_response(
                HTTPStatus.BAD_REQUEST, f"failed to create account: {exc}"
            )
        return created("Account created successfully")

    def get_account(self, account_id: str) -> Response:
        try:
            parsed_id = _parse_int64(account_id)
        except ValueError as exc:
            return error_response(HTTPStatus.BAD_REQUEST, f"invalid account id: {exc}")

        try:
            account = self.service.get_account(parsed_id)
        except Exception as exc:
            return error_response(HTTPStatus.NOT_FOUND, f"account not found: {exc}")

        return success_response(HTTPStatus.OK, "Account retrieved successfully", account)


class TransactionHandler:
    """Handles transfer submission requests."""

    def __init__(self, service: _TransferService) -> None:
        self.service = service

    def submit_transaction(self) -> Response:
        try:
            body = _read_object()
            source_id = _int_field(body, "source_account_id")
            dest_id = _int_field(body, "destination_account_id")
            amount = _money_field(body, "amount")
        except _DecodeError:
            return error_response(HTTPStatus.BAD_REQUEST, _INVALID_JSON)

        if source_id <= 0 or dest_id <= 0:
            return error_response(
                HTTPStatus.BAD_REQUEST,
                "source_account_id and destination_account_id must be positive integers",
            )
        if source_id == dest_id:
            return error_response(
                HTTPStatus.BAD_REQUEST,
                "source_account_id and destination_account_id must not be the same",
            )
        if amount <= 0:
            return error_response(
                HTTPStatus.BAD_REQUEST, "amount must be a valid positive number"
            )

        try:
            self.service.submit_transaction(source_id, dest_id, amount)
        except Exception as exc:
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                f"failed to submit transaction: {exc}",
            )
        return created("Transaction submitted successfully")


class Handler:
    """Bundle of every request handler the router needs."""

    def __init__(
        self, account_service: AccountService, transaction_service: _TransferService
    ) -> None:
        self.account = AccountHandler(account_service)
        self.transaction = TransactionHandler(transaction_service)