"""Logging setup for the payroll package.

All module loggers hang under the ``crew_payroll`` namespace so a single
``configure_logging`` call controls them.
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "crew_payroll"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach one stream handler to the package root logger (idempotent)."""

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    if not any(getattr(h, "_crew_payroll", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._crew_payroll = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    return root
