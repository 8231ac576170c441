"""
PackSync - Minecraft 整合包同步与安装工具
"""

__version__ = "0.1.0"
