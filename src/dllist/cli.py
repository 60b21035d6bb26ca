"""
dllist 命令行演示程序

将给定的载荷依次插入链表头部, 按需删除/查找, 最后输出链表内容.

示例:
    $ dllist c b a --remove b --find a
    Found a? Y
    a, c
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from pydantic import ValidationError
from rich.console import Console

from dllist.linked_list import LinkedList
from dllist.log.config import LogConfig, load_log_config, setup_logging
from dllist.pydantic_utils import format_validation_error

DEFAULT_PAYLOADS = ("c", "b", "a")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dllist",
        description="Insert payloads at the front of a doubly linked list and print it.",
    )
    parser.add_argument(
        "payloads",
        nargs="*",
        metavar="PAYLOAD",
        help="payloads to insert at the front, in order (default: c b a)",
    )
    parser.add_argument(
        "--find",
        action="append",
        default=[],
        metavar="TARGET",
        help="report whether TARGET is in the list (repeatable)",
    )
    parser.add_argument(
        "--remove",
        action="append",
        default=[],
        metavar="TARGET",
        help="remove the first node holding TARGET (repeatable)",
    )
    parser.add_argument("--log-level", dest="level", help="logging level")
    parser.add_argument(
        "--log-format", dest="output_format", help="logging format: text or json"
    )
    return parser


def _log_config(args: argparse.Namespace) -> LogConfig:
    config = load_log_config()
    overrides = {
        key: value
        for key in ("level", "output_format")
        if (value := getattr(args, key)) is not None
    }
    if overrides:
        config = LogConfig.model_validate({**config.model_dump(), **overrides})
    return config


def run(args: argparse.Namespace, console: Console) -> int:
    try:
        config = _log_config(args)
    except ValidationError as exc:
        err_console = Console(file=sys.stderr, soft_wrap=True)
        for error in format_validation_error(exc):
            err_console.print(
                f"Invalid logging option {error['field']}: {error['message']}",
                style="red",
                markup=False,
                highlight=False,
            )
        return 2

    logger = setup_logging(config)

    lst: LinkedList[str] = LinkedList()
    for payload in args.payloads or DEFAULT_PAYLOADS:
        lst.insert_front(payload)
    logger.infof("payload count: {count}", count=len(lst))

    for target in args.remove:
        if not lst.remove(target):
            logger.warningf("nothing to remove: {target!r}", target=target)

    for target in args.find:
        found = "Y" if target in lst else "N"
        console.print(f"Found {target}? {found}", markup=False, highlight=False)

    console.print(lst.to_display_string(), markup=False, highlight=False)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI 程序入口"""
    args = build_parser().parse_args(argv)
    console = Console(file=sys.stdout, soft_wrap=True)

    try:
        return run(args, console)
    except KeyboardInterrupt:
        console.print("Received SIGINT signal, Exiting...", highlight=False)
        return 130


if __name__ == "__main__":
    sys.exit(main())
