from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

import pytest

from packsync.exceptions import TransportError
from packsync.models import RemoteObject
from packsync.storage import ManifestClient

# 远程对象默认修改时间：远早于测试运行时刻
T1 = datetime.now(timezone.utc) - timedelta(days=1)


class FakeManifestClient(ManifestClient):
    """内存中的远程清单"""

    def __init__(self, buckets: Optional[Dict[str, Dict[str, bytes]]] = None):
        self.buckets: Dict[str, Dict[str, bytes]] = buckets or {}
        self.modified: Dict[Tuple[str, str], datetime] = {}
        self.list_errors: Dict[str, Exception] = {}
        self.fetch_errors: Dict[str, Exception] = {}
        self.list_calls: List[str] = []
        self.fetch_calls: List[Tuple[str, str]] = []
        self.closed = False

    def put(self, bucket: str, key: str, data: bytes, modified: datetime = T1) -> None:
        self.buckets.setdefault(bucket, {})[key] = data
        self.modified[(bucket, key)] = modified

    async def list_objects(self, bucket: str) -> List[RemoteObject]:
        self.list_calls.append(bucket)
        if bucket in self.list_errors:
            raise self.list_errors[bucket]
        return [
            RemoteObject(
                key=key,
                size=len(data),
                last_modified=self.modified.get((bucket, key), T1),
            )
            for key, data in self.buckets.get(bucket, {}).items()
        ]

    async def fetch_object(self, bucket: str, key: str) -> bytes:
        self.fetch_calls.append((bucket, key))
        if key in self.fetch_errors:
            raise self.fetch_errors[key]
        try:
            return self.buckets[bucket][key]
        except KeyError:
            raise TransportError(f"NoSuchKey: {key}")

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client() -> FakeManifestClient:
    return FakeManifestClient()


@pytest.fixture
def sink_lines() -> List[str]:
    return []


@pytest.fixture
def sink(sink_lines):
    return sink_lines.append
