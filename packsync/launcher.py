"""
启动器唤起

同步与安装完成后打开官方 Minecraft 启动器，不等待其退出。
"""

import subprocess
from typing import Optional

from loguru import logger

from packsync.logger import ProgressSink, default_sink


def open_launcher(path: str, sink: Optional[ProgressSink] = None) -> bool:
    """
    启动官方启动器

    Args:
        path: 启动器可执行文件路径
        sink: 进度回调

    Returns:
        是否成功启动进程；失败只记录日志
    """
    sink = sink or default_sink
    sink(f"正在启动 Minecraft: {path}")
    try:
        subprocess.Popen(
            [path],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        logger.warning(f"[启动] 无法启动 '{path}': {e}")
        sink(f"无法启动 Minecraft 启动器: {e}")
        return False
    return True
