"""Logging utilities.

Every module obtains its logger through :func:`get_logger` so that the
whole package shares one naming scheme and one output format.
"""

import logging
from typing import Dict

_LOGGERS: Dict[str, logging.Logger] = {}
_HANDLER_NAME = "bb84sim"


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger for the given module.

    Parameters
    ----------
    name : str
        Module name (typically ``__name__``).

    Returns
    -------
    logging.Logger
        Logger named ``bb84sim.<name>`` with a single stream handler.

    Examples
    --------
    >>> logger = get_logger(__name__)
    >>> logger.info("Sifting complete")
    """
    short_name = name.split(".", 1)[1] if name.startswith("bb84sim.") else name
    if short_name not in _LOGGERS:
        logger = logging.getLogger(f"bb84sim.{short_name}")
        if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
            handler = logging.StreamHandler()
            handler.set_name(_HANDLER_NAME)
            formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            logger.propagate = False
        _LOGGERS[short_name] = logger
    return _LOGGERS[short_name]


def set_log_level(level: str) -> None:
    """Set the logging level for all bb84sim loggers.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown names fall
        back to INFO.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.getLogger("bb84sim").setLevel(numeric_level)
    for logger in _LOGGERS.values():
        logger.setLevel(numeric_level)
