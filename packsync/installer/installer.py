"""
加载器安装器

检查加载器版本是否已安装；未安装时下载官方安装器并以外部进程运行。
所有失败都转换为 FAILED 结果，不向调用方抛出。
"""

import asyncio
import os
import tempfile
from typing import Dict, Optional

from loguru import logger

from packsync.download import DownloadManager
from packsync.exceptions import DownloadError, PackSyncError, ProcessError
from packsync.installer.loaders import LoaderSpec, get_loader
from packsync.logger import ProgressSink, default_sink
from packsync.models import (
    InstallResult,
    InstallState,
    LoaderInstallRequest,
    ModLoader,
)
from packsync.utils import java_executable


class LoaderInstaller:
    """加载器安装器"""

    def __init__(
        self,
        java: Optional[str] = None,
        download_manager: Optional[DownloadManager] = None,
        timeout: Optional[float] = None,
        temp_dir: Optional[str] = None,
        sink: Optional[ProgressSink] = None,
    ):
        self.java = java or java_executable()
        self.timeout = timeout
        self.temp_dir = temp_dir
        self._sink = sink or default_sink
        self.download_manager = download_manager or DownloadManager(sink=self._sink)
        # 同一种加载器的安装串行执行
        self._locks: Dict[ModLoader, asyncio.Lock] = {}

    def is_installed(self, request: LoaderInstallRequest) -> bool:
        """versions/<VersionTag> 目录存在即视为已安装"""
        tag = get_loader(request.loader).version_tag(request)
        return os.path.exists(os.path.join(request.minecraft_directory, "versions", tag))

    async def install(self, request: LoaderInstallRequest) -> InstallResult:
        """
        安装加载器

        Args:
            request: 安装请求

        Returns:
            InstallResult，state 为 ALREADY_INSTALLED / SUCCEEDED / FAILED 之一
        """
        lock = self._locks.setdefault(request.loader, asyncio.Lock())
        async with lock:
            return await self._install(request)

    async def _install(self, request: LoaderInstallRequest) -> InstallResult:
        spec = get_loader(request.loader)
        result = InstallResult(
            request=request,
            state=InstallState.UNINITIALIZED,
            version_tag=spec.version_tag(request),
        )

        self._transition(result, InstallState.CHECKING)
        if self.is_installed(request):
            self._transition(result, InstallState.ALREADY_INSTALLED)
            self._sink(
                f"{spec.display_name} 版本 {request.loader_version} 已安装，跳过安装。"
            )
            return result

        self._sink(f"正在安装 {spec.display_name}...")
        installer_path: Optional[str] = None
        try:
            self._transition(result, InstallState.DOWNLOADING)
            installer_path = await self._download(spec, request)

            self._transition(result, InstallState.INVOKING)
            await self._invoke(spec, installer_path, request)
        except PackSyncError as e:
            result.error = e
            self._transition(result, InstallState.FAILED)
            logger.error(f"[安装] {spec.display_name} 安装失败: {e}")
            self._sink(f"{spec.display_name} 安装失败: {e}")
            return result
        finally:
            if installer_path:
                self._remove_installer(installer_path)

        self._transition(result, InstallState.SUCCEEDED)
        self._sink(f"{spec.display_name} 安装成功。")
        return result

    async def _download(self, spec: LoaderSpec, request: LoaderInstallRequest) -> str:
        """下载安装器到唯一的临时文件"""
        url = spec.installer_url(request)
        self._sink(f"正在下载安装器: {url}")
        try:
            fd, path = tempfile.mkstemp(
                prefix=f"{spec.temp_prefix}-", suffix=".jar", dir=self.temp_dir
            )
            os.close(fd)
        except OSError as e:
            raise DownloadError(
                f"无法创建临时文件: {e}", context={"url": url}
            ) from e

        try:
            await self.download_manager.download_url(url, path)
        except DownloadError:
            self._remove_installer(path)
            raise
        return path

    async def _invoke(
        self, spec: LoaderSpec, installer_path: str, request: LoaderInstallRequest
    ) -> None:
        """运行安装器并等待退出"""
        args = spec.installer_args(installer_path, request)
        self._sink(f"执行命令: {self.java} {' '.join(args)}")

        try:
            process = await asyncio.create_subprocess_exec(self.java, *args)
        except OSError as e:
            raise ProcessError(
                f"无法启动 {self.java}: {e}", context={"java": self.java}
            ) from e

        try:
            returncode = await asyncio.wait_for(process.wait(), timeout=self.timeout)
        except asyncio.TimeoutError:
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()
            raise ProcessError(
                f"安装器在 {self.timeout} 秒内未结束，已终止",
                context={"timeout": self.timeout},
            )

        if returncode != 0:
            raise ProcessError(
                f"安装器退出码为 {returncode}",
                context={"args": args},
                returncode=returncode,
            )

    def _remove_installer(self, path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"[清理] 无法删除安装器 '{path}': {e}")

    @staticmethod
    def _transition(result: InstallResult, state: InstallState) -> None:
        logger.debug(f"[安装] {result.version_tag}: {result.state.value} -> {state.value}")
        result.state = state

    async def close(self):
        await self.download_manager.stop()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
