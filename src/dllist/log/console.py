from __future__ import annotations

import logging
import sys

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.text import Text

LEVEL_STYLES = {
    logging.DEBUG: "dim",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "bold white on red",
}


class StyledHandler(RichHandler):
    """
    基于 rich 的控制台日志处理器.

    WARNING 以下输出到 stdout, 其余输出到 stderr;
    不显示等级列时, 按等级为消息着色.
    """

    def __init__(self, show_time: bool = False, show_level: bool = False) -> None:
        super().__init__(
            show_time=show_time,
            show_level=show_level,
            show_path=False,
            markup=False,
            rich_tracebacks=False,
            log_time_format="%Y-%m-%d %H:%M:%S",
        )
        self.show_level = show_level

    def emit(self, record: logging.LogRecord) -> None:
        self.console.file = sys.stdout if record.levelno < logging.WARNING else sys.stderr
        super().emit(record)

    def render_message(
        self, record: logging.LogRecord, message: str
    ) -> ConsoleRenderable:
        text = super().render_message(record, message)

        if not self.show_level and isinstance(text, Text):
            style = LEVEL_STYLES.get(record.levelno)
            if style:
                text.stylize(style)

        return text
