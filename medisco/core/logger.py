import logging
import sys

from medisco.core import config


def setup_logging() -> logging.Logger:
    """
    Configure the ``medisco`` logger. Module loggers created with
    ``logging.getLogger(__name__)`` propagate to it.
    """
    logger = logging.getLogger("medisco")
    logger.setLevel(config.LOG_LEVEL)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(config.LOG_LEVEL)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    if not logger.handlers:
        logger.addHandler(handler)

    return logger


logger = setup_logging()
