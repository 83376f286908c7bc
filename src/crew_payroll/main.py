from __future__ import annotations

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_DAILY_THRESHOLD, DEFAULT_WEEK_STARTS_ON
from .core.logging import configure_logging, get_logger
from .database.connection import DBConfig

logger = get_logger(__name__)


def create_container() -> Container:
    """Load .env + the APP_ENV settings module, set up logging, wire services."""

    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = getattr(settings, "DB_CONFIG")
    daily_threshold = getattr(settings, "DAILY_OVERTIME_THRESHOLD", DEFAULT_DAILY_THRESHOLD)
    week_starts_on = int(getattr(settings, "WEEK_STARTS_ON", DEFAULT_WEEK_STARTS_ON))

    if getattr(settings, "DEBUG", False):
        logger.debug("settings=%s db=%s threshold=%s", settings_module, DBConfig.from_dict(db_config).describe(), daily_threshold)

    return build_container(db_config=db_config, daily_threshold=daily_threshold, week_starts_on=week_starts_on)
