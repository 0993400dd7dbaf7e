import logging
import os


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Only the command surface and pipeline log progress at INFO.
    # An explicit SEPARATOR_LOG_LEVEL wins for every logger.
    default_level = logging.WARNING
    if name.endswith('.cli') or name.endswith('.pipeline'):
        default_level = logging.INFO

    level_name = os.getenv('SEPARATOR_LOG_LEVEL', logging.getLevelName(default_level))
    try:
        level = getattr(logging, level_name.upper())
    except AttributeError:
        level = default_level

    logger.setLevel(level)
    return logger
