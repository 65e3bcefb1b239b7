# File: utils/file_manager.py
# Purpose: 统一文件管理
# Notes:
# - 目录创建
# - 文件大小 / hash（清单使用）

import hashlib
import os


class FileManager:
    """
    文件管理器

    提供统一的文件操作接口，所有导出类型公用
    """

    @staticmethod
    def ensure_directory(file_path: str) -> None:
        """
        确保文件所在目录存在

        参数:
            file_path: 文件路径
        """
        directory = os.path.dirname(file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory, exist_ok=True)

    @staticmethod
    def get_file_size(file_path: str) -> int:
        """文件不存在时返回 0"""
        try:
            return os.path.getsize(file_path)
        except OSError:
            return 0

    @staticmethod
    def file_hash(file_path: str) -> str:
        """
        计算文件 md5（文件不存在时返回空字符串）
        """
        if not os.path.isfile(file_path):
            return ""
        md5 = hashlib.md5()
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(65536), b""):
                md5.update(chunk)
        return md5.hexdigest()
