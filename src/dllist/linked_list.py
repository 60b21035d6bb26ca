"""
LinkedList 模块

提供以文本为载荷的双向链表实现.
链表通过后继引用持有全部节点, 前驱引用为弱引用, 仅用于删除时的 O(1) 重新链接.

主要组件:
- Node: 链表节点, 包含 payload/next/prev 属性
- LinkedList: 核心链表类, 实现头部插入/查找/删除/格式化输出

示例:
    >>> lst = LinkedList()
    >>> for payload in ("c", "b", "a"):
    ...     lst.insert_front(payload)
    >>> lst.to_display_string()
    'a, b, c'
    >>> lst.remove("b")
    True
    >>> str(lst)
    'a, c'
"""

from __future__ import annotations

import weakref
from typing import Any, Generic, TypeVar

from dllist.log.helpers import get_logger_adapter

T = TypeVar("T")

SEPARATOR = ", "

logger = get_logger_adapter(__name__)


class Node(Generic[T]):
    """
    双向链表节点.

    Attributes:
        payload (T): 节点存储的数据, 只读.
        next (Node[T] | None): 后继节点, 由本节点持有.
        prev (Node[T] | None): 前驱节点, 弱引用, 不参与所有权.
    """

    __slots__ = ("_payload", "_next", "_prev", "__weakref__")

    def __init__(self, payload: T) -> None:
        self._payload: T = payload
        self._next: Node[T] | None = None
        self._prev: weakref.ReferenceType[Node[T]] | None = None

    @property
    def payload(self) -> T:
        return self._payload

    @property
    def next(self) -> Node[T] | None:
        return self._next

    @property
    def prev(self) -> Node[T] | None:
        return self._prev() if self._prev is not None else None

    def _link_prev(self, node: Node[T] | None) -> None:
        self._prev = weakref.ref(node) if node is not None else None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.payload!r})"


class LinkedList(Generic[T]):
    """
    以头节点为入口的双向链表.

    空链表即 "没有头节点", 不单独维护状态.
    节点只能通过 `insert_front` 创建, 通过 `remove` 释放.
    """

    def __init__(self) -> None:
        self._head: Node[T] | None = None
        self._length = 0

    @property
    def head(self) -> Node[T] | None:
        """头节点, 空链表时为 None."""
        return self._head

    def __len__(self) -> int:
        return self._length

    def __bool__(self) -> bool:
        return self._head is not None

    def __contains__(self, target: Any) -> bool:
        return self.find(target) is not None

    def __str__(self) -> str:
        return self.to_display_string()

    def __repr__(self) -> str:
        """
        返回链表的字符串表示.

        Returns:
            str: 类似 "LinkedList(['a', 'b', 'c'])" 的格式.
        """
        items = ", ".join(repr(payload) for payload in self._payloads())
        return f"{self.__class__.__name__}([{items}])"

    # ===========================================================================

    def insert_front(self, payload: T) -> None:
        """
        在链表头部插入元素.

        旧的头节点(若存在)成为新节点的后继, 其前驱指向新节点.

        Args:
            payload (T): 要添加的数据.
        """
        node = Node(payload)
        old_head = self._head
        if old_head is not None:
            node._next = old_head
            old_head._link_prev(node)
        self._head = node
        self._length += 1
        logger.debugf(
            "insert_front {payload!r}, length={length}",
            payload=payload,
            length=self._length,
        )

    def find(self, target: T) -> Node[T] | None:
        """
        从头到尾查找第一个载荷等于 `target` 的节点.

        比较使用 `==`, 对字符串即逐字符精确比较, 不忽略大小写.

        Args:
            target (T): 要查找的数据.

        Returns:
            Node[T] | None: 第一个匹配的节点, 未找到(包括空链表)时为 None.
        """
        node = self._head
        while node is not None:
            if node.payload == target:
                return node
            node = node._next
        return None

    def remove(self, target: T) -> bool:
        """
        删除第一个载荷等于 `target` 的节点.

        头/尾/中间节点共用同一套断链逻辑, 仅对不存在的邻居做空值判断.

        Args:
            target (T): 要删除的数据.

        Returns:
            bool: 发生删除返回 True, 未找到返回 False(链表保持不变).
        """
        node = self.find(target)
        if node is None:
            logger.debugf("remove {target!r}: not found", target=target)
            return False

        prev = node.prev
        next_ = node._next
        if prev is not None:
            prev._next = next_
        if next_ is not None:
            next_._link_prev(prev)
        if node is self._head:
            self._head = next_

        node._next = None
        node._prev = None
        self._length -= 1
        logger.debugf(
            "remove {target!r}, length={length}", target=target, length=self._length
        )
        return True

    def to_display_string(self) -> str:
        """
        按链表顺序输出各载荷, 以 ", " 分隔, 末尾无分隔符.

        Returns:
            str: 格式化后的字符串, 空链表返回 "".
        """
        return SEPARATOR.join(str(payload) for payload in self._payloads())

    # ===========================================================================

    def is_empty(self) -> bool:
        """
        判断链表是否为空.

        Returns:
            bool: 为空返回 True, 否则 False.
        """
        return self._head is None

    def _payloads(self):
        node = self._head
        while node is not None:
            yield node.payload
            node = node._next
