import logging

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Attach a single stream handler to the package logger so modules can use
    logging.getLogger(__name__) instead of print().
    """
    logger = logging.getLogger("app")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, "%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
    logger.setLevel((level or settings.log_level).upper())
    return logger
