"""
PackSync 下载层

包含下载管理、任务队列、文件过期判断等功能。
"""

from packsync.download.manager import DownloadManager, DownloadStats
from packsync.download.queue import DownloadQueue, DownloadTask
from packsync.download.verifier import FileVerifier

__all__ = [
    "DownloadManager",
    "DownloadStats",
    "DownloadQueue",
    "DownloadTask",
    "FileVerifier",
]
