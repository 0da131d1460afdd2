import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Loggers of the HTTP stack, their per connection messages drown the pipeline steps
QUIET_LOGGERS: tuple[str, ...] = ("urllib3", "requests")


def setup_logging(loglevel: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the root logger for the BLIP client and return it.

    A single timestamped handler is attached on the first call, later calls
    only change the level. The HTTP stack stays at WARNING unless DEBUG is requested.
    """
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if loglevel <= logging.DEBUG else logging.WARNING)

    logger = logging.getLogger()
    logger.setLevel(loglevel)

    if not logger.handlers:
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
