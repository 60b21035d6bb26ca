import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """每个测试结束后移除包日志记录器上的处理器"""
    yield
    logger = logging.getLogger("dllist")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
