"""
本地目录扫描服务

列出目标目录下当前存在的条目（不递归）。
"""

import os
from typing import List

from loguru import logger

from packsync.models import LocalFileRecord


class LocalDirectoryScanner:
    """本地目录扫描器"""

    def scan(self, directory: str) -> List[LocalFileRecord]:
        """
        扫描目录的直接子条目

        Args:
            directory: 目标目录

        Returns:
            本地条目列表；目录不存在时返回空列表
        """
        if not os.path.isdir(directory):
            return []

        records: List[LocalFileRecord] = []
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    st = entry.stat(follow_symlinks=False)
                except OSError as e:
                    logger.warning(f"[扫描] 无法读取 '{entry.path}': {e}")
                    continue
                records.append(
                    LocalFileRecord(
                        name=entry.name,
                        path=entry.path,
                        size=st.st_size,
                        modified_time=st.st_mtime,
                        is_dir=entry.is_dir(follow_symlinks=False),
                    )
                )
        records.sort(key=lambda r: r.name)
        return records

    def names(self, directory: str) -> List[str]:
        """仅返回条目名称"""
        return [record.name for record in self.scan(directory)]
