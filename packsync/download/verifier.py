"""
文件校验器

基于文件大小与修改时间判断本地文件是否过期。
"""

import os
from datetime import datetime
from typing import Optional


class FileVerifier:
    """文件校验器"""

    @staticmethod
    def stat(file_path: str) -> Optional[os.stat_result]:
        """获取文件元数据，文件不存在时返回 None"""
        try:
            return os.stat(file_path)
        except (IOError, OSError):
            return None

    @staticmethod
    def should_download(
        file_path: str,
        remote_size: int,
        remote_modified: datetime,
    ) -> bool:
        """
        判断本地文件是否需要重新下载

        规则依次为：
            1. 本地不存在 -> 下载
            2. 大小不一致 -> 下载
            3. 远程修改时间严格晚于本地 -> 下载
            4. 否则视为最新

        Args:
            file_path: 本地文件路径
            remote_size: 远程对象大小（字节）
            remote_modified: 远程对象最后修改时间

        Returns:
            是否需要下载
        """
        st = FileVerifier.stat(file_path)
        if st is None:
            return True

        if st.st_size != remote_size:
            return True

        return remote_modified.timestamp() > st.st_mtime
