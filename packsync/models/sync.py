"""
同步数据模型

定义远程对象、本地文件记录与同步结果。
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from packsync.models.config import SyncTarget


@dataclass(frozen=True)
class RemoteObject:
    """
    远程清单中的一个对象。

    key 为相对于桶的路径，在一次列举结果中唯一。
    """

    key: str
    size: int
    last_modified: datetime


@dataclass(frozen=True)
class LocalFileRecord:
    """本地目录中的一个条目（由文件系统元数据即时生成）"""

    name: str
    path: str
    size: int
    modified_time: float
    is_dir: bool = False


class SyncStatus(Enum):
    """同步目标状态"""

    SYNCED = "synced"
    SKIPPED_EMPTY = "skipped_empty"
    FAILED = "failed"


@dataclass
class SyncReport:
    """单个同步目标的执行结果"""

    target: SyncTarget
    status: SyncStatus = SyncStatus.SYNCED
    downloaded: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status is not SyncStatus.FAILED
