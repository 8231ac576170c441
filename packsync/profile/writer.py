"""
启动配置写入器

把整合包的启动配置合并写入官方启动器的 launcher_profiles.json，
保留文件中其他已有的配置项。
"""

import json
import os
from typing import Any, Dict, Optional

import aiofiles
from loguru import logger

from packsync.exceptions import ProfileParseError, ProfileWriteError
from packsync.logger import ProgressSink, default_sink
from packsync.models import LaunchProfile
from packsync.models.config import DEFAULT_JAVA_ARGS, DEFAULT_PROFILE_NAME
from packsync.profile.icon import load_icon
from packsync.utils import utc_timestamp

# launcher_profiles.json 中 profiles 映射的键
PROFILE_KEY = "Modded Profile"


class ProfileWriter:
    """启动配置写入器"""

    def __init__(
        self,
        name: str = DEFAULT_PROFILE_NAME,
        java_args: Optional[str] = DEFAULT_JAVA_ARGS,
        icon_path: Optional[str] = None,
        sink: Optional[ProgressSink] = None,
    ):
        self.name = name
        self.java_args = java_args
        self.icon_path = icon_path
        self._sink = sink or default_sink

    async def write(
        self,
        profiles_path: str,
        game_directory: str,
        version_tag: str,
    ) -> LaunchProfile:
        """
        写入启动配置

        Args:
            profiles_path: launcher_profiles.json 路径
            game_directory: 整合包游戏目录
            version_tag: 已安装的加载器版本目录名

        Returns:
            写入的 LaunchProfile
        """
        try:
            if not os.path.exists(game_directory):
                os.makedirs(game_directory, exist_ok=True)
                self._sink(f"已创建目录: {game_directory}")

            document = await self._read_document(profiles_path)

            profile = LaunchProfile(
                name=self.name,
                game_directory=game_directory,
                version_id=version_tag,
                icon=load_icon(self.icon_path),
                last_used=utc_timestamp(),
                java_args=self.java_args,
            )
            logger.debug(f"[配置] 生成的启动配置: {profile.name} -> {version_tag}")

            document["profiles"][PROFILE_KEY] = profile.to_dict()

            parent = os.path.dirname(profiles_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            async with aiofiles.open(profiles_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(document, indent=2, ensure_ascii=False))
        except OSError as e:
            raise ProfileWriteError(
                f"写入启动配置失败: {e}",
                context={"profiles_path": profiles_path},
            ) from e

        self._sink("已成功创建 Minecraft 启动配置（独立实例）。")
        return profile

    async def _read_document(self, profiles_path: str) -> Dict[str, Any]:
        """读取已有配置；文件缺失或无法解析时返回空文档"""
        if not os.path.exists(profiles_path):
            return {"profiles": {}}

        async with aiofiles.open(profiles_path, "rb") as f:
            content = await f.read()

        try:
            document = self._parse(content)
        except ProfileParseError as e:
            logger.warning(f"[配置] {e}，将使用空配置")
            return {"profiles": {}}

        if not isinstance(document.get("profiles"), dict):
            document["profiles"] = {}
        return document

    @staticmethod
    def _parse(content: bytes) -> Dict[str, Any]:
        try:
            document = json.loads(content)
        except ValueError as e:
            raise ProfileParseError(f"无法解析 launcher_profiles.json: {e}") from e
        if not isinstance(document, dict):
            raise ProfileParseError("launcher_profiles.json 顶层不是对象")
        return document
