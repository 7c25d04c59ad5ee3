import logging
import pytest

from flowlog_tagger.core.capability_base import CapabilityContext

LOG_LINE_WEB = "2 123456789012 eni-abc 10.0.0.1 10.0.0.2 443 80 6 10 1000 1610000000 1610000010 ACCEPT OK"
LOG_LINE_TELNET = "2 123456789012 eni-abc 10.0.0.1 10.0.0.2 22 23 6 5 500 1610000000 1610000010 REJECT OK"


@pytest.fixture
def log_lines():
    return [LOG_LINE_WEB, LOG_LINE_TELNET]


@pytest.fixture
def ctx():
    messages = []

    def log(msg: str) -> None:
        messages.append(msg)

    c = CapabilityContext(log=log)
    c.messages = messages
    return c


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("flowlog_tagger")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
