"""
下载任务队列

同一个桶中的同一个对象在一次同步中只排队一次。
"""

import asyncio
from dataclasses import dataclass
from typing import Set, Tuple


@dataclass(frozen=True)
class DownloadTask:
    """下载任务：把桶中的一个对象写到本地路径"""

    bucket: str
    key: str
    dest_path: str


class DownloadQueue:
    """去重的 asyncio 任务队列"""

    def __init__(self):
        self._queue: "asyncio.Queue[DownloadTask]" = asyncio.Queue()
        self._seen: Set[Tuple[str, str]] = set()

    async def put(self, bucket: str, key: str, dest_path: str) -> bool:
        """加入任务；重复的 (bucket, key) 返回 False"""
        if (bucket, key) in self._seen:
            return False
        self._seen.add((bucket, key))
        await self._queue.put(DownloadTask(bucket=bucket, key=key, dest_path=dest_path))
        return True

    async def get(self) -> DownloadTask:
        return await self._queue.get()

    def task_done(self):
        self._queue.task_done()

    def pending(self) -> int:
        return self._queue.qsize()

    async def join(self):
        await self._queue.join()
