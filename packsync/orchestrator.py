"""
主协调器

依次执行：各同步目标的内容同步 -> 加载器安装 -> 启动配置写入。
每个阶段的失败都记录在报告中，由调用方决定如何处理。
"""

from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from packsync.exceptions import ProfileWriteError
from packsync.installer import LoaderInstaller, version_tag
from packsync.launcher import open_launcher
from packsync.logger import ProgressSink, default_sink
from packsync.models import (
    InstallResult,
    LaunchProfile,
    LoaderInstallRequest,
    PackSyncConfig,
    SyncReport,
)
from packsync.profile import ProfileWriter
from packsync.services import Reconciler
from packsync.storage import ManifestClient, S3ManifestClient


@dataclass
class PipelineReport:
    """一次完整运行的结果"""

    sync: List[SyncReport] = field(default_factory=list)
    install: Optional[InstallResult] = None
    profile: Optional[LaunchProfile] = None
    profile_error: Optional[Exception] = None
    launched: Optional[bool] = None

    @property
    def ok(self) -> bool:
        return (
            all(report.ok for report in self.sync)
            and (self.install is None or self.install.ok)
            and self.profile_error is None
        )


class PackSyncOrchestrator:
    """PackSync 主协调器"""

    def __init__(
        self,
        config: PackSyncConfig,
        sink: Optional[ProgressSink] = None,
        client: Optional[ManifestClient] = None,
        installer: Optional[LoaderInstaller] = None,
        profile_writer: Optional[ProfileWriter] = None,
    ):
        self.config = config
        self._sink = sink or default_sink
        self._client = client
        self._installer = installer
        self._profile_writer = profile_writer

    def install_request(self) -> LoaderInstallRequest:
        mc = self.config.minecraft
        return LoaderInstallRequest(
            loader=mc.loader,
            minecraft_version=mc.version,
            loader_version=mc.loader_version,
            minecraft_directory=mc.directory,
        )

    async def run(
        self,
        skip_install: bool = False,
        skip_profile: bool = False,
        launch: bool = False,
    ) -> PipelineReport:
        """运行完整流程"""
        # 配置缺失是唯一的致命错误，在任何 I/O 之前抛出
        self.config.validate()

        mc = self.config.minecraft
        self._sink(
            f"Minecraft 版本: {mc.version}，加载器: {mc.loader.value}，"
            f"加载器版本: {mc.loader_version}"
        )

        report = PipelineReport()
        client = self._client or S3ManifestClient(
            endpoint_url=self.config.remote.endpoint_url,
            access_key=self.config.remote.access_key,
            secret_key=self.config.remote.secret_key,
            region=self.config.remote.region,
        )
        try:
            reconciler = Reconciler(
                client,
                max_concurrent=self.config.max_concurrent,
                sink=self._sink,
            )
            report.sync = await reconciler.sync_all(self.config.targets)
        finally:
            await client.close()

        request = self.install_request()
        if not skip_install:
            installer = self._installer or LoaderInstaller(
                java=mc.java, timeout=mc.install_timeout, sink=self._sink
            )
            try:
                report.install = await installer.install(request)
            finally:
                await installer.close()

        if not skip_profile:
            tag = report.install.version_tag if report.install else version_tag(request)
            writer = self._profile_writer or ProfileWriter(
                name=self.config.profile.name,
                java_args=self.config.profile.java_args,
                icon_path=self.config.profile.icon,
                sink=self._sink,
            )
            try:
                report.profile = await writer.write(
                    mc.profiles_file, mc.game_directory, tag
                )
            except ProfileWriteError as e:
                report.profile_error = e
                logger.error(f"[配置] {e}")
                self._sink(f"创建启动配置失败: {e}")

        if launch:
            report.launched = open_launcher(mc.launcher, sink=self._sink)

        if report.ok:
            logger.success("PackSync 任务完成!")
        else:
            logger.warning("PackSync 任务完成，但部分步骤失败")
        return report
