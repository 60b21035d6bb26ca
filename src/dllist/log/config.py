from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from datetime import datetime
from typing import Annotated, Literal

from dllist.log import helpers
from dllist.log.console import StyledHandler
from dllist.pydantic_utils import BaseModelEx, convert

LOGGER_NAME = "dllist"
ENV_PREFIX = "DLLIST_LOG_"

OUTPUT_DEFAULT = "rich"
OUTPUT_TYPE = Literal["rich", "std", "stdout", "stderr"]

OUTPUT_FORMAT_DEFAULT = "text"
OUTPUT_FORMAT_TYPE = Literal["text", "json"]

TEXT_FORMAT_DEFAULT = "{asctime} {levelname}: {message}"
DATE_FORMAT_DEFAULT = "%Y-%m-%d %H:%M:%S"

LEVEL_DEFAULT = "WARNING"
LEVEL_TYPE = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


def _validate_text_format(value: str) -> str:
    logging.StrFormatStyle(value).validate()
    return value


def _validate_date_format(value: str) -> str:
    datetime.now().strftime(value)
    return value


class LogConfig(BaseModelEx):
    level: Annotated[LEVEL_TYPE, convert(str.upper)] = LEVEL_DEFAULT
    output: Annotated[OUTPUT_TYPE, convert(str.lower)] = OUTPUT_DEFAULT
    output_format: Annotated[
        OUTPUT_FORMAT_TYPE, convert(str.lower)
    ] = OUTPUT_FORMAT_DEFAULT
    text_format: Annotated[
        str, convert(_validate_text_format)
    ] = TEXT_FORMAT_DEFAULT
    date_format: Annotated[
        str, convert(_validate_date_format)
    ] = DATE_FORMAT_DEFAULT
    propagate: bool = True


def load_log_config(environ: Mapping[str, str] | None = None) -> LogConfig:
    """
    从环境变量构造日志配置.

    读取 `DLLIST_LOG_LEVEL`/`DLLIST_LOG_OUTPUT`/`DLLIST_LOG_FORMAT`,
    未设置或为空的项使用默认值.

    异常:
        pydantic.ValidationError: 取值非法时抛出
    """
    environ = os.environ if environ is None else environ
    return LogConfig(
        level=environ.get(f"{ENV_PREFIX}LEVEL"),
        output=environ.get(f"{ENV_PREFIX}OUTPUT"),
        output_format=environ.get(f"{ENV_PREFIX}FORMAT"),
    )


def get_handler(config: LogConfig) -> logging.Handler:
    """
    根据日志配置创建日志处理器.

    rich 输出只渲染消息本身, 时间和等级由 rich 负责;
    json 格式时总是使用普通流处理器, 保证每条记录为一行 json.
    """
    if config.output == "rich" and config.output_format == "text":
        handler = StyledHandler(show_level=config.level == "DEBUG")
        handler.setFormatter(helpers.EnhancedFormatter("{message}"))
        return handler

    if config.output == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    elif config.output == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    else:
        handler = helpers.StandardHandler()

    handler.setFormatter(
        helpers.EnhancedFormatter(
            config.text_format,
            config.date_format,
            style="{",
            output_format=config.output_format,
        )
    )
    return handler


def setup_logging(
    config: LogConfig, *, name: str = LOGGER_NAME
) -> helpers.LoggerAdapter:
    """
    按配置重置指定日志记录器的等级与处理器.

    参数:
        config: 已校验的日志配置.
        name: 日志记录器名称, 默认为包的根记录器.

    返回:
        包装后的日志适配器.
    """
    logger = logging.getLogger(name)
    logger.setLevel(helpers.get_level(config.level))
    logger.propagate = config.propagate

    for h in logger.handlers[:]:
        logger.removeHandler(h)
    logger.addHandler(get_handler(config))

    return helpers.LoggerAdapter(logger)
