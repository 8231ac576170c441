"""
PackSync 远程存储层

包含远程内容清单客户端抽象与 S3 兼容实现。
"""

from packsync.storage.base import ManifestClient
from packsync.storage.s3_client import S3ManifestClient

__all__ = [
    "ManifestClient",
    "S3ManifestClient",
]
