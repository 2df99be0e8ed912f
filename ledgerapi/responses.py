"""Uniform JSON envelopes for API responses."""

from __future__ import annotations

import json
from decimal import Decimal
from http import HTTPStatus
from typing import Any

from flask import Response

from ledgerapi.models import money_to_json

_JSON_MIMETYPE = "application/json"

# Characters escaped inside JSON strings so the body is safe to embed in HTML.
_HTML_SAFE = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return money_to_json(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"{type(value).__name__} is not JSON serialisable")


def _json_response(status_code: int, payload: dict[str, Any]) -> Response:
    text = json.dumps(
        payload, default=_json_default, separators=(",", ":"), ensure_ascii=False
    ).translate(_HTML_SAFE)
    return Response(text + "\n", status=status_code, mimetype=_JSON_MIMETYPE)


def error_response(status_code: int, message: str) -> Response:
    """Build a failure envelope: ``{"success": false, "error": message}``."""
    return _json_response(status_code, {"success": False, "error": message})


def success_response(status_code: int, message: str = "", data: Any = None) -> Response:
    """Build a success envelope; an empty message or ``None`` data is omitted."""
    payload: dict[str, Any] = {"success": True}
    if message:
        payload["message"] = message
    if data is not None:
        payload["data"] = data
    return _json_response(status_code, payload)


def bad_request(message: str) -> Response:
    """A 400 failure envelope."""
    return error_response(HTTPStatus.BAD_REQUEST, message)


def not_found(message: str) -> Response:
    """A 404 failure envelope."""
    return error_response(HTTPStatus.NOT_FOUND, message)


def created(message: str) -> Response:
    """A 201 success envelope without data."""
    return success_response(HTTPStatus.CREATED, message, None)


def ok(data: Any) -> Response:
    """A 200 success envelope carrying only data."""
    return success_response(HTTPStatus.OK, "", data)