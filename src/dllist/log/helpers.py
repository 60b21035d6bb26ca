from __future__ import annotations

import json
import logging
import sys
import traceback
from typing import Any, Literal


def get_logger_adapter(name: str | None = None) -> LoggerAdapter:
    return LoggerAdapter(logging.getLogger(name))


class StandardHandler(logging.StreamHandler):
    """
    按等级分流的流处理器: WARNING 以下写入 stdout, 其余写入 stderr.
    """

    def __init__(self) -> None:
        super().__init__(sys.stdout)
        self.out_stream = sys.stdout
        self.err_stream = sys.stderr

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno < logging.WARNING:
            self.stream = self.out_stream
        else:
            self.stream = self.err_stream
        super().emit(record)


class EnhancedFormatter(logging.Formatter):
    """
    扩展的日志格式化器, 支持 `{}` 风格消息与 json 输出
    """

    # fmt: off
    RESERVED_FIELDS = {
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename', 'module',
        'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName', 'created', 'msecs',
        'relativeCreated', 'thread', 'threadName', 'processName', 'process', 'taskName',
        'message', 'asctime', 'stacklevel', 'logger'
    }
    # fmt: on

    def __init__(
        self,
        textfmt: str | None = None,
        datefmt: str | None = None,
        style: Literal["%", "{"] = "{",
        validate: bool = True,
        *,
        output_format: Literal["text", "json"] = "text",
    ) -> None:
        super().__init__(textfmt, datefmt, style, validate)
        self.output_format = output_format

    def format(self, record: logging.LogRecord) -> str:
        record.message = self.getMessage(record)
        record.asctime = self.formatTime(record, self.datefmt)

        if self.output_format == "text":
            return self.formatMessage(record)
        return self.formatJson(record)

    def getMessage(self, record: logging.LogRecord) -> str:
        """`{` 风格的记录用记录字段填充消息, 字段缺失时保留原始消息."""
        if getattr(record, "_style", "%") != "{":
            return record.getMessage()
        try:
            return str(record.msg).format(*(record.args or ()), **vars(record))
        except (KeyError, IndexError, ValueError, AttributeError):
            return str(record.msg)

    def formatJson(self, record: logging.LogRecord) -> str:
        json_dict: dict[str, Any] = {
            "timestamp": record.asctime,
            "level": record.levelname,
            "logger": record.name,
            "message": record.message,
        }
        if record.exc_info:
            typ, value, tb = record.exc_info
            json_dict["exception"] = {
                "$type": f"{typ.__module__}.{typ.__name__}" if typ else None,
                "message": str(value) if value else None,
                "traceback": traceback.format_exception(typ, value, tb),
            }
        # 扩展字段
        for key, value in vars(record).items():
            if key not in self.RESERVED_FIELDS and not key.startswith("_"):
                json_dict[key] = value

        return json.dumps(json_dict, ensure_ascii=False, default=str)


class LoggerAdapter:
    """
    日志适配器, 封装标准库 `logging.Logger`

    提供两种日志格式化风格:
    - `log`: `%` 占位符格式(默认 logging 行为)
    - `logf`: `{}` 格式化(`str.format` 风格), 关键字参数作为记录字段

    通过构造函数传入的 `extra` 字段会自动合并到每条日志记录的 `extra` 中.
    """

    def __init__(self, logger: logging.Logger, **extra: Any) -> None:
        self.logger = logger
        self.extra = extra

    def process(
        self,
        level: int,
        msg: str,
        style: Literal["%", "{"],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> tuple[int, str, tuple[Any, ...], dict[str, Any]]:
        """
        预处理日志调用参数, 统一合并 `extra` 字段并注入 `_style`.

        `{` 风格下, 原本的 `kwargs` 整体作为新的 `extra`, 原 `extra` 的键提升到顶层.
        """
        if style != "%":
            extra = kwargs.pop("extra", {})
            kwargs = {**extra, "extra": kwargs}
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {}), "_style": style}
        return level, msg, args, kwargs

    def isEnabledFor(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.CRITICAL, msg, *args, **kwargs)

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        level, msg, args, kwargs = self.process(level, msg, "%", args, kwargs)
        self.logger.log(level, msg, *args, **kwargs)

    def debugf(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logf(logging.DEBUG, msg, *args, **kwargs)

    def infof(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logf(logging.INFO, msg, *args, **kwargs)

    def warningf(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logf(logging.WARNING, msg, *args, **kwargs)

    def errorf(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logf(logging.ERROR, msg, *args, **kwargs)

    def criticalf(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logf(logging.CRITICAL, msg, *args, **kwargs)

    def logf(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        level, msg, args, kwargs = self.process(level, msg, "{", args, kwargs)
        self.logger.log(level, msg, *args, **kwargs)


def get_level(name: str) -> int:
    """
    获取数值形式的等级

    参数:
        name: 字符串形式的等级
    返回:
        数值形式的等级
    异常:
        ValueError: 无此等级时抛出
    """

    mapping = logging.getLevelNamesMapping()
    if name not in mapping:
        raise ValueError(f"Unknown level: {name}")
    return mapping[name]
