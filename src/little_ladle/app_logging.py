"""Logging configuration helpers."""

import logging

_QUIET_ENVIRONMENTS = frozenset({"production", "prod"})


def configure_logging(debug: bool = False, environment: str = "local") -> None:
    """Set up the ``little_ladle`` logger.

    Production keeps to warnings and errors unless ``debug`` is set.
    """
    logger = logging.getLogger("little_ladle")
    if debug:
        logger.setLevel(logging.DEBUG)
    elif environment.lower() in _QUIET_ENVIRONMENTS:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.INFO)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("[Little Ladle] %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
