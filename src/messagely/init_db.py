"""Create the Messagely tables in the configured database."""

import logging

from messagely.core.logging import setup_logging
from messagely.core.settings import settings
from messagely.db.session import create_tables

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()


if __name__ == "__main__":
    setup_logging(settings.log_level)
    init_db()
    logger.info("Database initialized at %s", settings.database_url)
