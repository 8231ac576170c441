"""
PackSync 数据模型包

包含配置模型、同步模型和安装模型定义。
"""

from packsync.models.config import (
    ModLoader,
    SyncTarget,
    RemoteConfig,
    MinecraftConfig,
    ProfileConfig,
    PackSyncConfig,
)
from packsync.models.sync import (
    RemoteObject,
    LocalFileRecord,
    SyncStatus,
    SyncReport,
)
from packsync.models.install import (
    LoaderInstallRequest,
    InstallState,
    InstallResult,
    LaunchProfile,
)

__all__ = [
    # 配置模型
    "ModLoader",
    "SyncTarget",
    "RemoteConfig",
    "MinecraftConfig",
    "ProfileConfig",
    "PackSyncConfig",
    # 同步模型
    "RemoteObject",
    "LocalFileRecord",
    "SyncStatus",
    "SyncReport",
    # 安装模型
    "LoaderInstallRequest",
    "InstallState",
    "InstallResult",
    "LaunchProfile",
]
