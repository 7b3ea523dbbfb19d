import logging
import os

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LEVEL_ENV_VAR = "IMAGECUTTER_LOG_LEVEL"


def get_logger(name: str) -> logging.Logger:
    """Return ``name``'s logger with one stream handler attached."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(_resolve_level(name))
    return logger


def _resolve_level(name: str) -> int:
    # CLI reports progress, library modules only warn
    default = logging.INFO if name.endswith(".cli") else logging.WARNING

    requested = os.getenv(LEVEL_ENV_VAR)
    if not requested:
        return default

    level = logging.getLevelName(requested.strip().upper())
    return level if isinstance(level, int) else default
