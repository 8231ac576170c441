"""
PackSync 统一异常体系

提供分层的异常结构，支持错误代码、上下文信息和 JSON 序列化。
"""

from typing import Any, Dict, Optional


class PackSyncError(Exception):
    """PackSync 基础异常类"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self._get_default_code()
        self.context = context or {}

    def _get_default_code(self) -> str:
        """获取默认错误代码"""
        return "E000"

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigError(PackSyncError):
    """配置相关错误"""

    def _get_default_code(self) -> str:
        return "E100"


class ConfigParseError(ConfigError):
    """配置解析错误"""

    def _get_default_code(self) -> str:
        return "E101"


class ConfigValidationError(ConfigError):
    """配置验证错误"""

    def _get_default_code(self) -> str:
        return "E102"


class TransportError(PackSyncError):
    """远程存储 / 元数据接口访问错误（列举或获取对象失败）"""

    def _get_default_code(self) -> str:
        return "E200"


class SyncError(PackSyncError):
    """单个同步目标的协调失败"""

    def _get_default_code(self) -> str:
        return "E250"


class DownloadError(PackSyncError):
    """下载相关错误"""

    def _get_default_code(self) -> str:
        return "E300"


class DownloadNetworkError(DownloadError):
    """下载网络错误"""

    def _get_default_code(self) -> str:
        return "E301"


class DownloadFileError(DownloadError):
    """下载文件操作错误"""

    def _get_default_code(self) -> str:
        return "E303"


class ProcessError(PackSyncError):
    """外部安装器进程启动失败或非零退出"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        returncode: Optional[int] = None,
    ):
        super().__init__(message, code, context)
        self.returncode = returncode
        if returncode is not None:
            self.context["returncode"] = returncode

    def _get_default_code(self) -> str:
        return "E350"


class ProfileWriteError(PackSyncError):
    """启动配置文件写入错误"""

    def _get_default_code(self) -> str:
        return "E400"


class ProfileParseError(ProfileWriteError):
    """启动配置文件解析错误（总是在内部恢复）"""

    def _get_default_code(self) -> str:
        return "E401"


__all__ = [
    # 基础异常
    "PackSyncError",
    # 配置异常
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    # 远程存储异常
    "TransportError",
    "SyncError",
    # 下载异常
    "DownloadError",
    "DownloadNetworkError",
    "DownloadFileError",
    # 安装器异常
    "ProcessError",
    # 启动配置异常
    "ProfileWriteError",
    "ProfileParseError",
]
