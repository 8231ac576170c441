"""
PackSync 启动配置层

包含 launcher_profiles.json 写入器与图标编码。
"""

from packsync.profile.icon import encode_icon, load_icon
from packsync.profile.writer import PROFILE_KEY, ProfileWriter

__all__ = [
    "PROFILE_KEY",
    "ProfileWriter",
    "encode_icon",
    "load_icon",
]
