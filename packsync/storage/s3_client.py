"""
S3 兼容对象存储客户端

支持 AWS S3、Cloudflare R2、MinIO 等兼容端点。
boto3 为同步接口，所有调用放在线程中执行。
"""

import asyncio
from datetime import datetime, timezone
from typing import List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from packsync.exceptions import TransportError
from packsync.models import RemoteObject
from packsync.storage.base import ManifestClient


class S3ManifestClient(ManifestClient):
    """基于 list_objects_v2 / get_object 的清单客户端"""

    def __init__(
        self,
        endpoint_url: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        region: str = "us-east-1",
    ):
        kwargs: dict = {
            "config": Config(
                region_name=region,
                signature_version="s3v4",
                # 每次请求只尝试一次，失败直接上报
                retries={"max_attempts": 1, "mode": "standard"},
            ),
        }
        if access_key and secret_key:
            kwargs["aws_access_key_id"] = access_key
            kwargs["aws_secret_access_key"] = secret_key
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url

        self._endpoint_url = endpoint_url
        self._client = boto3.client("s3", **kwargs)

    async def list_objects(self, bucket: str) -> List[RemoteObject]:
        return await asyncio.to_thread(self._list_objects, bucket)

    async def fetch_object(self, bucket: str, key: str) -> bytes:
        return await asyncio.to_thread(self._fetch_object, bucket, key)

    def _list_objects(self, bucket: str) -> List[RemoteObject]:
        result: List[RemoteObject] = []
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=bucket):
                if page.get("IsTruncated") and not page.get("NextContinuationToken"):
                    raise TransportError(
                        f"桶 '{bucket}' 的列举结果被截断且没有续传标记",
                        context={"bucket": bucket},
                    )
                for obj in page.get("Contents", []):
                    key = obj["Key"]
                    # 目录占位对象
                    if key.endswith("/"):
                        continue
                    result.append(
                        RemoteObject(
                            key=key,
                            size=int(obj.get("Size", 0)),
                            last_modified=self._as_utc(obj.get("LastModified")),
                        )
                    )
        except (ClientError, BotoCoreError) as e:
            raise TransportError(
                f"列举桶 '{bucket}' 失败: {e}",
                context={"bucket": bucket, "endpoint": self._endpoint_url},
            ) from e
        logger.debug(f"[列举] 桶 '{bucket}' 共 {len(result)} 个对象")
        return result

    def _fetch_object(self, bucket: str, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            raise TransportError(
                f"获取对象 '{key}' 失败: {e}",
                context={"bucket": bucket, "key": key},
            ) from e

    @staticmethod
    def _as_utc(value: Optional[datetime]) -> datetime:
        if value is None:
            return datetime.fromtimestamp(0, tz=timezone.utc)
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
