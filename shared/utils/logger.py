import logging

from shared.core.config import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s]: %(message)s"
)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
