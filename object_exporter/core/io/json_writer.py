# File: core/io/json_writer.py
# Purpose: 结构化文档（JSON）写入器
# Notes:
# - 所有 JSON 文档根对象都带 FileVersion
# - 向量写成 {x, y, z}，四元数写成 {x, y, z, w}
# - 先在内存中完成序列化，再一次性写入文件

import json
from typing import Any, Dict

from ...config.constants import FILE_VERSION
from ..errors import OpenFailureError


def vector_to_json(v) -> Dict[str, float]:
    """向量 → {x, y, z}"""
    return {"x": float(v[0]), "y": float(v[1]), "z": float(v[2])}


def quat_to_json(q) -> Dict[str, float]:
    """四元数 → {x, y, z, w}"""
    return {"x": float(q.x), "y": float(q.y), "z": float(q.z), "w": float(q.w)}


class JsonDocumentWriter:
    """
    JSON 文档写入器

    使用方式:
        writer = JsonDocumentWriter("Camera.json")
        root = writer.create_root()
        root["Camera"] = {...}
        writer.save()
    """

    def __init__(self, filepath: str, file_version: int = FILE_VERSION):
        self.filepath = filepath
        self.file_version = file_version
        self.root: Dict[str, Any] = {}

    def create_root(self) -> Dict[str, Any]:
        """创建根对象"""
        self.root = {"FileVersion": self.file_version}
        return self.root

    def dumps(self) -> str:
        return json.dumps(self.root, indent=2, ensure_ascii=False)

    def save(self) -> None:
        """保存到文件"""
        if not self.root:
            raise ValueError("Root object not created")

        content = self.dumps()
        try:
            f = open(self.filepath, "w", encoding="utf-8", newline="\n")
        except OSError as e:
            raise OpenFailureError(f"cannot open '{self.filepath}' for writing: {e}") from e
        with f:
            f.write(content)
