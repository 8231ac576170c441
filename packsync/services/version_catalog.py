"""
版本目录服务

从公开的元数据接口获取 Minecraft、Forge、Fabric 的可用版本。
"""

from typing import Dict, List, Optional

import aiohttp

from packsync.exceptions import TransportError

MINECRAFT_MANIFEST_URL = "https://launchermeta.mojang.com/mc/game/version_manifest.json"
FORGE_PROMOTIONS_URL = (
    "https://files.minecraftforge.net/net/minecraftforge/forge/promotions_slim.json"
)
FABRIC_INSTALLER_URL = "https://meta.fabricmc.net/v2/versions/installer"


class VersionCatalog:
    """版本目录客户端"""

    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        self._session = session
        self._owned_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _request(self, url: str):
        """发送 GET 请求并返回 JSON"""
        try:
            async with self.session.get(url) as response:
                if response.status != 200:
                    raise TransportError(
                        f"API 请求失败 (状态码: {response.status})",
                        context={"url": url, "status_code": response.status},
                    )
                return await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise TransportError(
                f"API 请求失败: {e}", context={"url": url}
            ) from e

    async def minecraft_releases(self) -> List[str]:
        """获取 Minecraft 正式版列表（新版本在前）"""
        data = await self._request(MINECRAFT_MANIFEST_URL)
        return [
            version["id"]
            for version in data.get("versions", [])
            if version.get("type") == "release"
        ]

    async def forge_promotions(self) -> Dict[str, str]:
        """获取 Forge 推荐版本映射，例如 {"1.20.1-recommended": "47.2.0"}"""
        data = await self._request(FORGE_PROMOTIONS_URL)
        return dict(data.get("promos", {}))

    async def forge_versions(self, mc_version: str) -> Dict[str, str]:
        """获取指定 Minecraft 版本的 Forge 推荐 / 最新版本"""
        promos = await self.forge_promotions()
        prefix = f"{mc_version}-"
        return {
            key[len(prefix):]: value
            for key, value in promos.items()
            if key.startswith(prefix)
        }

    async def fabric_installer_versions(self) -> List[str]:
        """获取 Fabric 安装器版本列表"""
        data = await self._request(FABRIC_INSTALLER_URL)
        return [entry["version"] for entry in data]

    async def close(self):
        """关闭客户端"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
