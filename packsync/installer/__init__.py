"""
PackSync 加载器安装层
"""

from packsync.installer.loaders import (
    FABRIC_PINNED_VERSION,
    FabricLoader,
    ForgeLoader,
    LoaderSpec,
    get_loader,
    version_tag,
)
from packsync.installer.installer import LoaderInstaller

__all__ = [
    "FABRIC_PINNED_VERSION",
    "FabricLoader",
    "ForgeLoader",
    "LoaderSpec",
    "LoaderInstaller",
    "get_loader",
    "version_tag",
]
