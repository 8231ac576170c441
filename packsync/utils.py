import os
import sys
from datetime import datetime, timezone
from typing import Optional


def config_dir() -> str:
    """平台相关的用户配置目录"""
    if sys.platform == "win32":
        return os.environ.get("APPDATA") or os.path.expanduser("~")
    if sys.platform == "darwin":
        return os.path.expanduser("~/Library/Application Support")
    return os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")


def default_minecraft_dir() -> str:
    """官方启动器的默认 .minecraft 目录"""
    if sys.platform == "win32":
        return os.path.join(config_dir(), ".minecraft")
    if sys.platform == "darwin":
        return os.path.join(config_dir(), "minecraft")
    return os.path.expanduser("~/.minecraft")


def default_game_dir() -> str:
    """整合包独立实例目录"""
    return os.path.join(config_dir(), ".minecraftCanada")


def java_executable() -> str:
    return "java.exe" if sys.platform == "win32" else "java"


def default_launcher_path() -> str:
    """官方 Minecraft 启动器的默认路径"""
    if sys.platform == "win32":
        return "C:/XboxGames/Minecraft Launcher/Content/Minecraft.exe"
    if sys.platform == "darwin":
        return "/Applications/Minecraft.app/Contents/MacOS/launcher"
    return "minecraft-launcher"


def expand_path(path: str) -> str:
    return os.path.abspath(os.path.expandvars(os.path.expanduser(path)))


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC 时间，毫秒精度，带 Z 后缀"""
    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
