# hd44780/log.py
# Tagged log helpers. Messages look like the console output of the board
# scripts: [2024-05-01 12:00:00] [INFO] [I2CTransport] message

import logging

LOGGER_NAME = "hd44780"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(tag)s] %(message)s"


def get_logger(tag):
    """Return a ``_log(message, level="INFO")`` helper for one module."""
    logger = logging.getLogger(f"{LOGGER_NAME}.{tag}")

    def _log(message, level="INFO"):
        logger.log(logging.getLevelName(level), message, extra={"tag": tag})

    return _log


def configure(level="INFO", stream=None):
    """Print driver messages to the console. Call once from a script."""
    root = logging.getLogger(LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
    return root
