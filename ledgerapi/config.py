"""Runtime configuration and the shared application logger."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, fields


@dataclass(frozen=True)
class Config:
    """Database connection settings; each field is read from its upper-cased name."""

    db_user: str = "postgres"
    db_password: str = "password"
    db_name: str = "postgres"
    db_host: str = "localhost"
    db_port: str = "5432"


_LOGGER = logging.getLogger("transactions")
if not _LOGGER.handlers:
    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(
        logging.Formatter(
            "[transactions] %(asctime)s %(filename)s:%(lineno)d: %(message)s",
            "%Y/%m/%d %H:%M:%S",
        )
    )
    _LOGGER.addHandler(_handler)
    _LOGGER.setLevel(logging.INFO)
    _LOGGER.propagate = False


def get_logger() -> logging.Logger:
    """Return the application logger, which writes to standard output."""
    return _LOGGER


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Read settings from the environment; empty or missing values use defaults."""
    env = os.environ if environ is None else environ
    return Config(**{f.name: env.get(f.name.upper()) or f.default for f in fields(Config)})