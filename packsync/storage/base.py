from abc import ABC, abstractmethod
from typing import List

from packsync.models import RemoteObject


class ManifestClient(ABC):
    """远程内容清单客户端（只读）"""

    @abstractmethod
    async def list_objects(self, bucket: str) -> List[RemoteObject]:
        """
        列出桶中全部对象。

        空列表是合法结果，与请求失败（TransportError）不同。
        """

    @abstractmethod
    async def fetch_object(self, bucket: str, key: str) -> bytes:
        """获取单个对象的完整内容"""

    async def close(self) -> None:
        """释放客户端资源"""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
