"""Flask application: routes, request logging and the server entry point."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from datetime import datetime
from http import HTTPStatus

from flask import Flask, Response
from sqlalchemy.exc import SQLAlchemyError

from ledgerapi.config import get_logger, load_config
from ledgerapi.db import new_db
from ledgerapi.handlers import Handler
from ledgerapi.repository import AccountRepository, TransactionRepository
from ledgerapi.responses import success_response
from ledgerapi.service import AccountService, TransactionService

_PORT = 8080
_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _format_time(moment: datetime) -> str:
    """Render e.g. ``Monday, Jan 2, 2006 at 3:04 PM``."""
    meridiem = "PM" if moment.hour >= 12 else "AM"
    return (
        f"{_DAYS[moment.weekday()]}, {_MONTHS[moment.month - 1]} {moment.day}, {moment.year}"
        f" at {moment.hour % 12 or 12}:{moment.minute:02d} {meridiem}"
    )


def healthcheck() -> Response:
    """Report that the server is running, with the current local time."""
    return success_response(
        HTTPStatus.OK, "server running", {"health": "ok", "time": _format_time(datetime.now())}
    )


def create_app(handler: Handler) -> Flask:
    """Build the application with every route bound to ``handler``."""
    app = Flask("ledgerapi")
    inner = app.wsgi_app
    logger = get_logger()

    def log_requests(environ, start_response):
        uri = environ.get("PATH_INFO", "") or "/"
        if environ.get("QUERY_STRING"):
            uri += "?" + environ["QUERY_STRING"]
        logger.info("%s %s", environ.get("REQUEST_METHOD", ""), uri)
        return inner(environ, start_response)

    app.wsgi_app = log_requests  # type: ignore[method-assign]
    app.add_url_rule("/health", "health", healthcheck, methods=["GET"])
    app.add_url_rule("/accounts", "create_account", handler.account.create_account, methods=["POST"])
    app.add_url_rule(
        "/accounts/<account_id>", "get_account", handler.account.get_account, methods=["GET"]
    )
    app.add_url_rule(
        "/transactions", "submit_transaction", handler.transaction.submit_transaction,
        methods=["POST"],
    )
    return app


def main(argv: Sequence[str] | None = None) -> None:
    """Connect to the database and serve the API on port 8080."""
    argparse.ArgumentParser(prog="ledgerapi", description="Serve the ledger HTTP API.").parse_args(argv)
    logger = get_logger()
    try:
        engine = new_db(load_config())
    except (SQLAlchemyError, ImportError) as exc:
        logger.error("failed to connect to db: %s", exc)
        raise SystemExit(1) from exc
    try:
        handler = Handler(
            AccountService(AccountRepository(engine)),
            TransactionService(TransactionRepository(engine)),
        )
        logger.info("Server started at :%d", _PORT)
        create_app(handler).run(host="0.0.0.0", port=_PORT)
    finally:
        engine.dispose()