import logging

from logger import LIBRARY_LOGGERS, get_logger, quiet_library_loggers, uvicorn_log_config


def test_get_logger_attaches_one_handler():
    first = get_logger("tests.logger.single")
    second = get_logger("tests.logger.single")

    assert first is second
    assert len(first.handlers) == 1
    assert first.propagate is False


def test_explicit_level_wins():
    logger = get_logger("tests.logger.explicit", level = logging.ERROR)

    assert logger.level == logging.ERROR


def test_env_level_in_prod():
    # conftest runs the suite with ENV=prod
    assert get_logger("tests.logger.prod").level == logging.WARNING


def test_library_loggers_follow_env():
    quiet_library_loggers(logging.ERROR)

    assert all(logging.getLogger(name).level == logging.ERROR for name in LIBRARY_LOGGERS)

    quiet_library_loggers()
    assert logging.getLogger("httpx").level == logging.WARNING


def test_uvicorn_config_uses_service_format():
    config = uvicorn_log_config()

    assert config["formatters"]["default"]["format"].startswith("%(asctime)s | %(levelname)-8s")
    assert config["loggers"]["uvicorn.access"]["level"] == "WARNING"
    assert config["loggers"]["uvicorn"]["handlers"] == ["default"]
