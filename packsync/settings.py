"""
上次选择记录

保存用户最近一次使用的 Minecraft 版本、加载器和加载器版本。
"""

import json
import os
from dataclasses import asdict, dataclass
from typing import Optional

import click
from loguru import logger

APP_NAME = "packsync"


@dataclass
class Selection:
    """用户选择"""

    minecraft_version: str
    mod_loader: str
    mod_loader_version: str


def default_store_path() -> str:
    return os.path.join(click.get_app_dir(APP_NAME), "selection.json")


class SelectionStore:
    """基于 JSON 文件的选择记录"""

    def __init__(self, path: Optional[str] = None):
        self.path = path or default_store_path()

    def load(self) -> Optional[Selection]:
        """读取记录，文件缺失或内容无效时返回 None"""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return Selection(
                minecraft_version=str(data["minecraft_version"]),
                mod_loader=str(data["mod_loader"]),
                mod_loader_version=str(data["mod_loader_version"]),
            )
        except FileNotFoundError:
            return None
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"[设置] 无法读取 {self.path}: {e}")
            return None

    def save(self, selection: Selection) -> str:
        """保存记录并返回文件路径"""
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(asdict(selection), f, indent=2)
        logger.debug(f"[设置] 选择已保存到 {self.path}")
        return self.path
