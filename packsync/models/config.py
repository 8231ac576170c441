"""
配置数据模型

定义远程存储、Minecraft、启动配置和同步目标等配置项，
并负责从字典（TOML/JSON/YAML 解析结果）构建与校验。
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from packsync.exceptions import ConfigValidationError
from packsync.utils import (
    default_game_dir,
    default_launcher_path,
    default_minecraft_dir,
    expand_path,
    java_executable,
)

DEFAULT_PROFILE_NAME = "Canada Mods"
DEFAULT_JAVA_ARGS = "-Xmx7G"


class ModLoader(Enum):
    """模组加载器"""

    FORGE = "forge"
    FABRIC = "fabric"

    @classmethod
    def parse(cls, value: str) -> "ModLoader":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigValidationError(
                f"mod_loader 必须为 forge/fabric，当前为: {value}",
                context={"loader": value},
            )


@dataclass(frozen=True)
class SyncTarget:
    """远程桶与本地目录的一组同步关系"""

    bucket: str
    directory: str


@dataclass
class RemoteConfig:
    """S3 兼容对象存储配置"""

    endpoint_url: Optional[str] = None
    region: str = "us-east-1"
    access_key: Optional[str] = None
    secret_key: Optional[str] = None


@dataclass
class MinecraftConfig:
    """Minecraft 与加载器配置"""

    version: str = ""
    loader: ModLoader = ModLoader.FABRIC
    loader_version: str = ""
    directory: str = field(default_factory=default_minecraft_dir)
    game_directory: str = field(default_factory=default_game_dir)
    java: str = field(default_factory=java_executable)
    launcher: str = field(default_factory=default_launcher_path)
    install_timeout: Optional[float] = None

    @property
    def profiles_file(self) -> str:
        return os.path.join(self.directory, "launcher_profiles.json")


@dataclass
class ProfileConfig:
    """启动配置项"""

    name: str = DEFAULT_PROFILE_NAME
    java_args: Optional[str] = DEFAULT_JAVA_ARGS
    icon: Optional[str] = None


# 环境变量名 -> RemoteConfig 字段，靠前的优先
ENV_OVERRIDES = {
    "endpoint_url": ("PACKSYNC_ENDPOINT", "R2_ENDPOINT"),
    "access_key": ("PACKSYNC_ACCESS_KEY", "R2_ACCESS_KEY"),
    "secret_key": ("PACKSYNC_SECRET_KEY", "R2_SECRET_KEY"),
}


@dataclass
class PackSyncConfig:
    """PackSync 完整配置"""

    remote: RemoteConfig = field(default_factory=RemoteConfig)
    minecraft: MinecraftConfig = field(default_factory=MinecraftConfig)
    profile: ProfileConfig = field(default_factory=ProfileConfig)
    targets: List[SyncTarget] = field(default_factory=list)
    max_concurrent: int = 5

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        env: Optional[Mapping[str, str]] = None,
    ) -> "PackSyncConfig":
        """
        从字典构建配置

        Args:
            data: 配置文件解析结果
            env: 环境变量（默认 os.environ），用于覆盖远程存储凭据

        Returns:
            PackSyncConfig
        """
        if env is None:
            env = os.environ
        if not isinstance(data, Mapping):
            raise ConfigValidationError("配置文件顶层必须是一个表/对象")

        remote_data = dict(data.get("remote") or {})
        for key, names in ENV_OVERRIDES.items():
            for name in names:
                if env.get(name):
                    remote_data[key] = env[name]
                    break
        remote = RemoteConfig(
            endpoint_url=remote_data.get("endpoint_url"),
            region=remote_data.get("region", "us-east-1"),
            access_key=remote_data.get("access_key"),
            secret_key=remote_data.get("secret_key"),
        )

        mc_data = data.get("minecraft") or {}
        minecraft = MinecraftConfig(
            version=str(mc_data.get("version", "")),
            loader=ModLoader.parse(mc_data.get("loader", "fabric")),
            loader_version=str(mc_data.get("loader_version", "")),
        )
        if mc_data.get("directory"):
            minecraft.directory = mc_data["directory"]
        if mc_data.get("game_directory"):
            minecraft.game_directory = mc_data["game_directory"]
        minecraft.directory = expand_path(minecraft.directory)
        minecraft.game_directory = expand_path(minecraft.game_directory)
        if mc_data.get("java"):
            minecraft.java = mc_data["java"]
        if mc_data.get("launcher"):
            minecraft.launcher = os.path.expanduser(mc_data["launcher"])
        if mc_data.get("install_timeout") is not None:
            minecraft.install_timeout = cls._positive_number(
                mc_data["install_timeout"], "minecraft.install_timeout"
            )

        profile_data = data.get("profile") or {}
        profile = ProfileConfig(
            name=profile_data.get("name", DEFAULT_PROFILE_NAME),
            java_args=profile_data.get("java_args", DEFAULT_JAVA_ARGS),
            icon=expand_path(profile_data["icon"]) if profile_data.get("icon") else None,
        )

        targets = [
            cls._parse_target(entry, minecraft.game_directory)
            for entry in data.get("targets") or []
        ]
        # 兼容旧部署：只配置了 R2_BUCKET 时同步到 mods 目录
        if not targets and env.get("R2_BUCKET"):
            targets.append(
                SyncTarget(
                    bucket=env["R2_BUCKET"],
                    directory=os.path.join(minecraft.game_directory, "mods"),
                )
            )

        max_concurrent = data.get("max_concurrent", 5)
        if not isinstance(max_concurrent, int) or max_concurrent <= 0:
            raise ConfigValidationError(
                "max_concurrent 必须为正整数",
                context={"max_concurrent": max_concurrent},
            )

        return cls(
            remote=remote,
            minecraft=minecraft,
            profile=profile,
            targets=targets,
            max_concurrent=max_concurrent,
        )

    @staticmethod
    def _parse_target(entry: Any, game_directory: str) -> SyncTarget:
        if not isinstance(entry, Mapping) or not entry.get("bucket"):
            raise ConfigValidationError(
                "每个 targets 项必须包含 bucket", context={"target": entry}
            )
        directory = entry.get("directory") or entry["bucket"]
        directory = os.path.expanduser(directory)
        if not os.path.isabs(directory):
            directory = os.path.join(game_directory, directory)
        return SyncTarget(bucket=entry["bucket"], directory=os.path.abspath(directory))

    @staticmethod
    def _positive_number(value: Any, name: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ConfigValidationError(f"{name} 必须为正数", context={name: value})
        return float(value)

    def validate(self) -> None:
        """校验运行前必须具备的配置，缺失时在任何 I/O 之前失败"""
        missing: List[str] = []
        if not self.remote.endpoint_url:
            missing.append("remote.endpoint_url")
        if not self.remote.access_key:
            missing.append("remote.access_key")
        if not self.remote.secret_key:
            missing.append("remote.secret_key")
        if not self.minecraft.version:
            missing.append("minecraft.version")
        if not self.minecraft.loader_version:
            missing.append("minecraft.loader_version")
        if missing:
            raise ConfigValidationError(
                f"缺少必需配置: {', '.join(missing)}", context={"missing": missing}
            )
        if not self.targets:
            raise ConfigValidationError("请配置至少一个同步目标 (targets)")

    def summary(self) -> Dict[str, Any]:
        """不含凭据的配置摘要"""
        return {
            "endpoint_url": self.remote.endpoint_url,
            "minecraft_version": self.minecraft.version,
            "loader": self.minecraft.loader.value,
            "loader_version": self.minecraft.loader_version,
            "minecraft_directory": self.minecraft.directory,
            "game_directory": self.minecraft.game_directory,
            "launcher": self.minecraft.launcher,
            "targets": [(t.bucket, t.directory) for t in self.targets],
        }
