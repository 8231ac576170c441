"""
同步协调服务

让本地目录与远程桶的对象清单保持一致：
下载新增或变更的对象，删除远程已不存在的本地条目。
"""

import os
from typing import Iterable, List, Optional, Set

from loguru import logger

from packsync.download import DownloadManager, FileVerifier
from packsync.exceptions import PackSyncError, SyncError
from packsync.logger import ProgressSink, default_sink
from packsync.models import RemoteObject, SyncReport, SyncStatus, SyncTarget
from packsync.services.scanner import LocalDirectoryScanner
from packsync.storage import ManifestClient


class Reconciler:
    """同步协调器"""

    def __init__(
        self,
        client: ManifestClient,
        scanner: Optional[LocalDirectoryScanner] = None,
        max_concurrent: int = 5,
        sink: Optional[ProgressSink] = None,
    ):
        self.client = client
        self.scanner = scanner or LocalDirectoryScanner()
        self.verifier = FileVerifier()
        self.max_concurrent = max_concurrent
        self._sink = sink or default_sink

    async def sync_all(self, targets: Iterable[SyncTarget]) -> List[SyncReport]:
        """依次同步所有目标，单个目标失败不影响其他目标"""
        return [await self.sync(target) for target in targets]

    async def sync(self, target: SyncTarget) -> SyncReport:
        """
        同步单个目标

        Returns:
            SyncReport，失败时 status 为 FAILED 且 error 记录原因
        """
        report = SyncReport(target=target)
        try:
            try:
                await self._reconcile(target, report)
            except OSError as e:
                raise SyncError(
                    f"本地目录操作失败: {e}",
                    context={"bucket": target.bucket, "directory": target.directory},
                ) from e
        except PackSyncError as e:
            report.status = SyncStatus.FAILED
            report.error = e
            logger.error(f"[同步] 目标 '{target.bucket}' 失败: {e}")
            self._sink(f"同步 '{target.bucket}' 失败: {e}")
        return report

    async def _reconcile(self, target: SyncTarget, report: SyncReport) -> None:
        self._sink(f"正在检查远程内容: {target.bucket}")
        remote_objects = await self.client.list_objects(target.bucket)

        if not remote_objects:
            # 空清单不触碰本地文件，避免误配置的桶清空本地安装
            report.status = SyncStatus.SKIPPED_EMPTY
            logger.warning(f"[同步] 桶 '{target.bucket}' 为空或无权列举，跳过")
            self._sink(f"桶 '{target.bucket}' 为空或无权列举，跳过同步")
            return

        os.makedirs(target.directory, exist_ok=True)

        manager = DownloadManager(
            client=self.client,
            max_concurrent=self.max_concurrent,
            sink=self._sink,
        )
        for obj in remote_objects:
            try:
                local_path = self.resolve_path(target.directory, obj.key)
            except SyncError as e:
                report.failed.append(obj.key)
                logger.error(f"[同步] {e}")
                continue

            if self.verifier.should_download(local_path, obj.size, obj.last_modified):
                await manager.enqueue(target.bucket, obj.key, local_path)
            else:
                report.skipped.append(obj.key)
                logger.debug(f"[跳过] '{obj.key}' 未变化")

        if manager.stats.total:
            await manager.run()
        report.downloaded.extend(manager.get_completed())
        report.failed.extend(key for key, _ in manager.get_failed())

        # 完整清单已获取且下载全部结束后才删除
        self._delete_missing(target.directory, self.keep_names(remote_objects), report)

        if report.failed:
            raise SyncError(
                f"{len(report.failed)} 个对象同步失败",
                context={"bucket": target.bucket, "failed": list(report.failed)},
            )

        self._sink(
            f"'{target.bucket}' 同步完成: 下载 {len(report.downloaded)}，"
            f"跳过 {len(report.skipped)}，删除 {len(report.deleted)}"
        )

    @staticmethod
    def resolve_path(directory: str, key: str) -> str:
        """把对象 key 映射为目录内的本地路径，拒绝越出目录的 key"""
        root = os.path.abspath(directory)
        path = os.path.abspath(os.path.join(root, key))
        if os.path.isabs(key) or os.path.commonpath([root, path]) != root or path == root:
            raise SyncError(
                f"非法的对象路径: '{key}'", context={"key": key, "directory": directory}
            )
        return path

    @staticmethod
    def keep_names(remote_objects: Iterable[RemoteObject]) -> Set[str]:
        """本地目录顶层应保留的条目名：对象 key 及嵌套 key 的首段"""
        names: Set[str] = set()
        for obj in remote_objects:
            names.add(obj.key)
            names.add(obj.key.replace("\\", "/").split("/", 1)[0])
        return names

    def _delete_missing(
        self, directory: str, keep: Set[str], report: SyncReport
    ) -> None:
        for record in self.scanner.scan(directory):
            if record.name in keep:
                continue
            self._sink(f"正在删除本地文件: {record.name}")
            try:
                os.remove(record.path)
                report.deleted.append(record.name)
            except OSError as e:
                # 尽力删除，继续处理其余条目
                logger.error(f"[删除] 无法删除 '{record.path}': {e}")
                self._sink(f"删除 '{record.name}' 失败: {e}")
