import logging

from bb84sim.log import get_logger, set_log_level

FORMAT = "%(levelname)s:%(name)s:%(message)s"


def _own_handlers(logger: logging.Logger):
    return [
        handler
        for handler in logger.handlers
        if handler.formatter is not None and handler.formatter._fmt == FORMAT
    ]


def test_get_logger_namespaces_and_caches():
    logger = get_logger("bb84sim.log_naming")

    assert logger.name == "bb84sim.log_naming"
    assert get_logger("log_naming") is logger
    assert len(_own_handlers(logger)) == 1
    assert logger.propagate is False


def test_repeated_get_logger_adds_no_handler():
    logger = get_logger("log_repeat")
    before = len(_own_handlers(logger))

    get_logger("log_repeat")
    get_logger("bb84sim.log_repeat")

    assert before == 1
    assert len(_own_handlers(logger)) == 1


def test_module_loggers_have_one_formatted_handler():
    logger = get_logger("bb84sim.sweep")

    assert len(_own_handlers(logger)) == 1


def test_set_log_level_applies_to_existing_loggers():
    logger = get_logger("bb84sim.bb84_protocol")

    set_log_level("DEBUG")
    assert logger.isEnabledFor(logging.DEBUG)

    set_log_level("not-a-level")
    assert logger.level == logging.INFO

    set_log_level("WARNING")
    assert not logger.isEnabledFor(logging.INFO)
