import base64
import mimetypes
from typing import Optional

# 内置的默认图标（PNG）
DEFAULT_ICON_PNG = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def encode_icon(data: bytes, mime_type: str = "image/png") -> str:
    """把图片内容编码为 data URI"""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def load_icon(path: Optional[str] = None) -> str:
    """读取图标文件并编码；未指定时使用内置图标"""
    if not path:
        return f"data:image/png;base64,{DEFAULT_ICON_PNG}"
    mime_type, _ = mimetypes.guess_type(path)
    with open(path, "rb") as f:
        return encode_icon(f.read(), mime_type or "image/png")
