import logging
import sys

from .config import LOG_LEVEL

logger = logging.getLogger("task_tracker")


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """Configure application logging"""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger.setLevel(log_level)
    return logger
