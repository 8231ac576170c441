"""
安装与启动配置数据模型
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from packsync.models.config import ModLoader


@dataclass(frozen=True)
class LoaderInstallRequest:
    """加载器安装请求"""

    loader: ModLoader
    minecraft_version: str
    loader_version: str
    minecraft_directory: str


class InstallState(Enum):
    """加载器安装状态机"""

    UNINITIALIZED = "uninitialized"
    CHECKING = "checking"
    ALREADY_INSTALLED = "already_installed"
    DOWNLOADING = "downloading"
    INVOKING = "invoking"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (
            InstallState.ALREADY_INSTALLED,
            InstallState.SUCCEEDED,
            InstallState.FAILED,
        )


@dataclass
class InstallResult:
    """加载器安装结果"""

    request: LoaderInstallRequest
    state: InstallState
    version_tag: str
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.state in (InstallState.ALREADY_INSTALLED, InstallState.SUCCEEDED)


@dataclass
class LaunchProfile:
    """官方启动器中的一个启动配置"""

    name: str
    game_directory: str
    version_id: str
    icon: str
    last_used: str
    java_args: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """转换为 launcher_profiles.json 中的字段格式"""
        data: Dict[str, Any] = {
            "name": self.name,
            "gameDir": self.game_directory,
            "lastVersionId": self.version_id,
            "icon": self.icon,
            "lastUsed": self.last_used,
        }
        if self.java_args is not None:
            data["javaArgs"] = self.java_args
        return data
