"""
模组加载器定义

每种加载器各自负责：已安装版本目录名、安装器下载地址、安装器命令行参数。
"""

from abc import ABC, abstractmethod
from typing import Dict, List

from packsync.models import LoaderInstallRequest, ModLoader

# 构建时锁定的 Fabric 版本，Fabric 安装器生成的版本目录名中带有该版本号
FABRIC_PINNED_VERSION = "0.16.10"

FORGE_MAVEN = "https://maven.minecraftforge.net/net/minecraftforge/forge"
FABRIC_MAVEN = "https://maven.fabricmc.net/net/fabricmc/fabric-installer"


class LoaderSpec(ABC):
    """加载器行为基类"""

    loader: ModLoader
    display_name: str = ""

    @property
    def temp_prefix(self) -> str:
        return f"{self.loader.value}_installer"

    @abstractmethod
    def version_tag(self, request: LoaderInstallRequest) -> str:
        """安装完成后 versions/ 下的目录名"""

    @abstractmethod
    def installer_url(self, request: LoaderInstallRequest) -> str:
        """安装器 jar 的下载地址"""

    @abstractmethod
    def installer_args(
        self, installer_path: str, request: LoaderInstallRequest
    ) -> List[str]:
        """传给 java 的参数列表"""


class ForgeLoader(LoaderSpec):
    loader = ModLoader.FORGE
    display_name = "Forge"

    def version_tag(self, request: LoaderInstallRequest) -> str:
        return f"{request.minecraft_version}-forge-{request.loader_version}"

    def installer_url(self, request: LoaderInstallRequest) -> str:
        full_version = f"{request.minecraft_version}-{request.loader_version}"
        return f"{FORGE_MAVEN}/{full_version}/forge-{full_version}-installer.jar"

    def installer_args(
        self, installer_path: str, request: LoaderInstallRequest
    ) -> List[str]:
        return ["-jar", installer_path, "--installClient", request.minecraft_directory]


class FabricLoader(LoaderSpec):
    loader = ModLoader.FABRIC
    display_name = "Fabric"

    def version_tag(self, request: LoaderInstallRequest) -> str:
        return f"fabric-loader-{FABRIC_PINNED_VERSION}-{request.minecraft_version}"

    def installer_url(self, request: LoaderInstallRequest) -> str:
        version = request.loader_version
        return f"{FABRIC_MAVEN}/{version}/fabric-installer-{version}.jar"

    def installer_args(
        self, installer_path: str, request: LoaderInstallRequest
    ) -> List[str]:
        return [
            "-jar",
            installer_path,
            "client",
            "-dir",
            request.minecraft_directory,
            "-mcversion",
            request.minecraft_version,
        ]


LOADERS: Dict[ModLoader, LoaderSpec] = {
    ModLoader.FORGE: ForgeLoader(),
    ModLoader.FABRIC: FabricLoader(),
}


def get_loader(loader: ModLoader) -> LoaderSpec:
    """根据加载器类型获取对应实现"""
    return LOADERS[loader]


def version_tag(request: LoaderInstallRequest) -> str:
    return get_loader(request.loader).version_tag(request)
