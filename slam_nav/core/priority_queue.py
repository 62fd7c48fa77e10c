#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
优先队列：按 priority 排序的二叉最小堆

push 时上浮、pop 时下沉（heapq 的标准实现）。相同 priority 的弹出顺序不做保证。
"""

import heapq
import itertools
from dataclasses import dataclass
from typing import List, Optional, Tuple

from loguru import logger

from slam_nav.common.exceptions import EmptyQueueError
from slam_nav.core.map_model import Coord


@dataclass
class QueueEntry:
    """搜索前沿条目"""
    priority: float
    cost: float
    position: Coord
    predecessor: Optional[Coord] = None


class PriorityQueue:
    """
    最小堆优先队列

    示例:
        ```python
        front = PriorityQueue()
        front.Push(QueueEntry(priority=1.5, cost=1.0, position=(3, 4)))
        entry = front.PopMin()
        ```
    """

    def __init__(self):
        # (priority, 插入序号, entry)，序号只用于避免比较 entry 本身
        self.heap_: List[Tuple[float, int, QueueEntry]] = []
        self.counter_ = itertools.count()

    def Push(self, entry: QueueEntry) -> None:
        heapq.heappush(self.heap_, (entry.priority, next(self.counter_), entry))

    def PopMin(self) -> QueueEntry:
        """
        弹出 priority 最小的条目

        Raises:
            EmptyQueueError: 队列为空
        """
        if not self.heap_:
            error_msg = "优先队列为空，无法弹出"
            logger.error(error_msg)
            raise EmptyQueueError(error_msg)
        return heapq.heappop(self.heap_)[2]

    def Peek(self) -> QueueEntry:
        if not self.heap_:
            error_msg = "优先队列为空"
            logger.error(error_msg)
            raise EmptyQueueError(error_msg)
        return self.heap_[0][2]

    def Size(self) -> int:
        return len(self.heap_)

    def IsEmpty(self) -> bool:
        return not self.heap_

    def __len__(self) -> int:
        return len(self.heap_)
