import logging
import sys

_LOGGERS = {}
_LEVEL = logging.INFO


def get_logger(name):
    """Creates, or returns the already configured, logger with the specified name."""
    if name in _LOGGERS:
        return _LOGGERS[name]
    logger = logging.getLogger(name)
    logger.setLevel(_LEVEL)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    formatter = logging.Formatter("%(asctime)s %(levelname)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    _LOGGERS[name] = logger
    return logger


def set_level(level):
    """Sets the level of every logger handed out by get_logger, and of later ones."""
    global _LEVEL
    _LEVEL = level
    for logger in _LOGGERS.values():
        logger.setLevel(level)
