"""
日志模块测试

覆盖 LoggerAdapter 的两种格式化风格/EnhancedFormatter 的 text 与 json 输出,
以及 setup_logging 的处理器装配.
"""

import json
import logging

import pytest

from dllist.log.config import LogConfig, setup_logging
from dllist.log.console import StyledHandler
from dllist.log.helpers import (
    EnhancedFormatter,
    LoggerAdapter,
    StandardHandler,
    get_level,
    get_logger_adapter,
)


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured():
    """返回挂载了内存处理器的适配器"""
    logger = logging.getLogger("dllist.tests.log")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = ListHandler()
    handler.setFormatter(EnhancedFormatter("{levelname}: {message}"))
    logger.addHandler(handler)
    yield LoggerAdapter(logger, component="tests"), handler
    logger.removeHandler(handler)


class TestLoggerAdapter:
    """测试日志适配器"""

    def test_percent_style(self, captured):
        adapter, handler = captured
        adapter.info("inserted %s", "a")
        record = handler.records[0]
        assert handler.format(record) == "INFO: inserted a"
        assert record.component == "tests"

    def test_brace_style(self, captured):
        adapter, handler = captured
        adapter.warningf("removed {target!r}", target="b")
        record = handler.records[0]
        assert record.target == "b"
        assert record._style == "{"
        assert handler.format(record) == "WARNING: removed 'b'"

    def test_disabled_level_skipped(self, captured):
        adapter, handler = captured
        adapter.logger.setLevel(logging.ERROR)
        adapter.debugf("hidden {x}", x=1)
        adapter.info("hidden")
        assert handler.records == []

    def test_get_logger_adapter(self):
        adapter = get_logger_adapter("dllist.linked_list")
        assert adapter.logger is logging.getLogger("dllist.linked_list")


class TestEnhancedFormatter:
    """测试格式化器"""

    def test_json_output(self, captured):
        adapter, handler = captured
        handler.setFormatter(EnhancedFormatter(output_format="json"))
        adapter.errorf("nothing to remove: {target}", target="x")
        data = json.loads(handler.format(handler.records[0]))
        assert data["level"] == "ERROR"
        assert data["logger"] == "dllist.tests.log"
        assert data["message"] == "nothing to remove: x"
        assert data["target"] == "x"
        assert data["component"] == "tests"
        assert "_style" not in data

    def test_json_exception(self, captured):
        adapter, handler = captured
        handler.setFormatter(EnhancedFormatter(output_format="json"))
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            adapter.error("failed", exc_info=True)
        data = json.loads(handler.format(handler.records[0]))
        assert data["exception"]["$type"] == "builtins.RuntimeError"
        assert data["exception"]["message"] == "boom"

    def test_bad_brace_message_kept(self, captured):
        adapter, handler = captured
        adapter.infof("missing {field}")
        assert handler.format(handler.records[0]) == "INFO: missing {field}"

    def test_percent_record_not_brace_formatted(self, captured):
        adapter, handler = captured
        adapter.info("literal {levelname} kept")
        assert handler.format(handler.records[0]) == "INFO: literal {levelname} kept"


class TestStandardHandler:
    """测试标准处理器的输出流选择"""

    def test_streams(self, capsys):
        logger = logging.getLogger("dllist.tests.std")
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        handler = StandardHandler()
        handler.setFormatter(EnhancedFormatter("{message}"))
        logger.addHandler(handler)
        try:
            logger.info("to stdout")
            logger.warning("to stderr")
        finally:
            logger.removeHandler(handler)

        out, err = capsys.readouterr()
        assert out == "to stdout\n"
        assert err == "to stderr\n"


class TestGetLevel:
    """测试等级解析"""

    def test_known(self):
        assert get_level("DEBUG") == logging.DEBUG

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown level"):
            get_level("VERBOSE")


class TestSetupLogging:
    """测试日志装配"""

    def test_rich_handler_by_default(self):
        adapter = setup_logging(LogConfig())
        logger = logging.getLogger("dllist")
        assert adapter.logger is logger
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], StyledHandler)

    def test_level_from_config(self):
        setup_logging(LogConfig(level="debug"))
        assert logging.getLogger("dllist").level == logging.DEBUG

    def test_replaces_handlers(self):
        setup_logging(LogConfig())
        setup_logging(LogConfig(output="std"))
        logger = logging.getLogger("dllist")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], StandardHandler)

    def test_json_to_stdout(self, capsys):
        adapter = setup_logging(
            LogConfig(level="info", output="stdout", output_format="json"),
            name="dllist.tests.setup",
        )
        adapter.infof("inserted {count} payloads", count=3)
        line = capsys.readouterr().out.strip()
        data = json.loads(line)
        assert data["message"] == "inserted 3 payloads"
        assert data["count"] == 3
        logger = logging.getLogger("dllist.tests.setup")
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
