"""
下载管理器

负责远程对象与安装器文件的下载、并发控制、下载统计。
所有下载均只尝试一次，失败即上报。
"""

import asyncio
import os
from dataclasses import dataclass
from typing import List, Optional, Tuple

import aiofiles
import aiohttp
from loguru import logger

from packsync.download.queue import DownloadQueue
from packsync.exceptions import (
    DownloadError,
    DownloadFileError,
    DownloadNetworkError,
)
from packsync.logger import ProgressSink, default_sink
from packsync.storage import ManifestClient


@dataclass
class DownloadStats:
    """下载统计"""

    total: int = 0
    completed: int = 0
    failed: int = 0
    bytes_downloaded: int = 0


class DownloadManager:
    """下载管理器"""

    def __init__(
        self,
        client: Optional[ManifestClient] = None,
        max_concurrent: int = 5,
        session: Optional[aiohttp.ClientSession] = None,
        sink: Optional[ProgressSink] = None,
    ):
        self.client = client
        self.max_concurrent = max_concurrent
        self.queue = DownloadQueue()
        self.stats = DownloadStats()
        self._session = session
        self._owned_session = session is None
        self._sink = sink or default_sink
        self._workers: list[asyncio.Task] = []

        self._completed: List[str] = []
        self._failed: List[Tuple[str, Exception]] = []

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def enqueue(self, bucket: str, key: str, dest_path: str) -> bool:
        """添加对象下载任务"""
        added = await self.queue.put(bucket=bucket, key=key, dest_path=dest_path)
        if added:
            self.stats.total += 1
            logger.debug(f"[队列] '{key}' 已加入下载队列")
        return added

    async def download_object(self, bucket: str, key: str, dest_path: str) -> int:
        """
        下载桶中的单个对象并覆盖写入本地文件

        Returns:
            写入的字节数
        """
        if self.client is None:
            raise DownloadError("未配置远程清单客户端", context={"key": key})

        self._sink(f"正在下载更新的文件: {key} -> {dest_path}")
        data = await self.client.fetch_object(bucket, key)

        parent = os.path.dirname(dest_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        try:
            async with aiofiles.open(dest_path, "wb") as f:
                await f.write(data)
        except OSError as e:
            self._remove_partial(dest_path)
            raise DownloadFileError(
                f"写入文件失败: {dest_path}",
                context={"key": key, "error": str(e)},
            ) from e

        self.stats.bytes_downloaded += len(data)
        logger.debug(f"[完成] '{key}' 已保存，大小 {len(data)} 字节")
        return len(data)

    async def download_url(self, url: str, dest_path: str) -> int:
        """
        通过 HTTP 下载单个文件

        Returns:
            写入的字节数
        """
        self._sink(f"正在下载: {url}")
        written = 0
        try:
            async with self.session.get(url) as response:
                if response.status != 200:
                    raise DownloadNetworkError(
                        f"HTTP {response.status}",
                        context={"url": url, "status": response.status},
                    )

                async with aiofiles.open(dest_path, "wb") as f:
                    async for chunk in response.content.iter_chunked(8192):
                        await f.write(chunk)
                        written += len(chunk)
        except DownloadError:
            self._remove_partial(dest_path)
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._remove_partial(dest_path)
            raise DownloadNetworkError(
                f"下载失败: {url}", context={"url": url, "error": str(e)}
            ) from e
        except OSError as e:
            self._remove_partial(dest_path)
            raise DownloadFileError(
                f"写入文件失败: {dest_path}", context={"url": url, "error": str(e)}
            ) from e

        self.stats.bytes_downloaded += written
        self._sink(f"已下载: {dest_path}")
        return written

    @staticmethod
    def _remove_partial(path: str) -> None:
        """清理不完整的文件"""
        if os.path.exists(path):
            try:
                os.remove(path)
            except OSError as e:
                logger.warning(f"[清理] 无法删除不完整的文件 '{path}': {e}")

    async def _worker(self):
        """下载工作协程"""
        while True:
            task = await self.queue.get()
            try:
                await self.download_object(task.bucket, task.key, task.dest_path)
                self.stats.completed += 1
                self._completed.append(task.key)
            except Exception as e:
                # 单个对象失败不影响其他对象，队列必须继续消费
                self.stats.failed += 1
                self._failed.append((task.key, e))
                logger.error(f"[错误] 下载 '{task.key}' 失败: {e}")
                self._sink(f"下载 '{task.key}' 失败: {e}")
            finally:
                self.queue.task_done()

    async def start(self):
        """启动下载器"""
        logger.debug(
            f"[启动] 下载器启动，最大并发数: {self.max_concurrent}，"
            f"待下载: {self.queue.pending()}"
        )
        self._workers = [
            asyncio.create_task(self._worker(), name=f"downloader-{i}")
            for i in range(self.max_concurrent)
        ]

    async def wait_until_complete(self):
        """等待所有任务完成"""
        await self.queue.join()

    async def stop(self):
        """停止下载器"""
        for worker in self._workers:
            worker.cancel()

        if self._workers:
            await asyncio.gather(*self._workers, return_exceptions=True)
            self._workers.clear()

        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()
        logger.debug("[停止] 下载器已停止")

    async def run(self):
        """运行下载器（启动并等待完成）"""
        await self.start()
        try:
            await self.wait_until_complete()
        finally:
            await self.stop()

    def get_stats(self) -> DownloadStats:
        """获取下载统计"""
        return self.stats

    def get_completed(self) -> List[str]:
        return self._completed.copy()

    def get_failed(self) -> List[Tuple[str, Exception]]:
        """获取失败的下载列表"""
        return self._failed.copy()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()
