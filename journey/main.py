from loguru import logger

from journey.config.settings import settings
from journey.core.logger import setup_logger
from journey.db.models import Base
from journey.db.session import get_engine


def init_app(log_file: str | None = None) -> None:
    """Initialize logging and make sure database tables exist."""
    setup_logger(level=settings.log_level, log_file=log_file)

    logger.info("Ensuring database tables exist")
    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables verified")
