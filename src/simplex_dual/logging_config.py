import logging
import sys

LOG_FORMAT = "[%(asctime)s] [%(levelname)-8s] [%(module)-15s] - %(message)s"


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """
    Configure the ``simplex_dual`` logger with a single stderr handler.

    stdout stays free for the MCP stdio transport.
    """

    logger = logging.getLogger("simplex_dual")
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if logger.hasHandlers():
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
