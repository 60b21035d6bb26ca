"""
日志配置模型测试
"""

import pytest
from pydantic import ValidationError

from dllist.log.config import LogConfig, load_log_config
from dllist.pydantic_utils import format_validation_error


class TestLogConfig:
    """测试 LogConfig 校验"""

    def test_defaults(self):
        config = LogConfig()
        assert config.level == "WARNING"
        assert config.output == "rich"
        assert config.output_format == "text"
        assert config.propagate is True

    def test_case_conversion(self):
        config = LogConfig(level="debug", output="STDERR", output_format="JSON")
        assert config.level == "DEBUG"
        assert config.output == "stderr"
        assert config.output_format == "json"

    def test_empty_falls_back_to_default(self):
        config = LogConfig(level="", output=None, text_format="")
        assert config.level == "WARNING"
        assert config.output == "rich"
        assert config.text_format == "{asctime} {levelname}: {message}"

    def test_invalid_level(self):
        with pytest.raises(ValidationError) as exc_info:
            LogConfig(level="verbose")
        errors = format_validation_error(exc_info.value)
        assert errors[0]["field"] == "level"
        assert errors[0]["input"] == "VERBOSE"

    def test_invalid_text_format(self):
        with pytest.raises(ValidationError) as exc_info:
            LogConfig(text_format="no fields here")
        errors = format_validation_error(exc_info.value)
        assert errors[0]["field"] == "text_format"
        assert errors[0]["type"] == "Convert failed"

    def test_convert_rejects_wrong_type(self):
        with pytest.raises(ValidationError):
            LogConfig(level=10)


class TestLoadLogConfig:
    """测试从环境变量加载"""

    def test_empty_environ(self):
        assert load_log_config({}) == LogConfig()

    def test_from_environ(self):
        config = load_log_config(
            {
                "DLLIST_LOG_LEVEL": "info",
                "DLLIST_LOG_OUTPUT": "stdout",
                "DLLIST_LOG_FORMAT": "json",
            }
        )
        assert config.level == "INFO"
        assert config.output == "stdout"
        assert config.output_format == "json"

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("DLLIST_LOG_LEVEL", "error")
        assert load_log_config().level == "ERROR"

    def test_invalid_environ(self):
        with pytest.raises(ValidationError):
            load_log_config({"DLLIST_LOG_FORMAT": "xml"})
