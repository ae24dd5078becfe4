"""线程池批量执行

所有任务都是有界的文件系统调用，用线程池并发提交、按输入顺序收集。
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def run_ordered(fn: Callable[[T], R], items: Iterable[T], max_workers: int = 1) -> list[R]:
    """对每个元素执行 fn，结果与输入顺序一致

    按输入顺序取结果，第一个失败的任务的异常直接抛出，不返回部分结果。
    max_workers == 1 时在调用线程中串行执行，遇错立即停止。
    """
    items = list(items)
    if max_workers == 1 or len(items) <= 1:
        return [fn(item) for item in items]

    with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
        futures = [executor.submit(fn, item) for item in items]
        return [future.result() for future in futures]
