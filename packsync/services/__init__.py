"""
PackSync 服务层

包含业务逻辑服务：本地目录扫描、同步协调、版本目录。
"""

from packsync.services.scanner import LocalDirectoryScanner
from packsync.services.reconciler import Reconciler
from packsync.services.version_catalog import VersionCatalog

__all__ = [
    "LocalDirectoryScanner",
    "Reconciler",
    "VersionCatalog",
]
