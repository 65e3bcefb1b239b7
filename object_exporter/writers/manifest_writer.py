# File: writers/manifest_writer.py
# Purpose: manifest.json 写入器，列出一次地图导出写出的全部文件及其依赖
# Notes:
# - 路径相对导出根目录（.map 所在目录），正斜杠
# - 同一文件只出现一次；重复添加时刷新 md5 并合并依赖
# - 没有时间戳：同一场景导出两次得到相同的清单

import json
from typing import Dict, List, Optional

from ..core.errors import OpenFailureError
from ..core.schema import Manifest, ManifestEntry
from ..utils.file_manager import FileManager


class ManifestWriter:
    """
    ManifestWriter
    --------------
        manifest = ManifestWriter("out/manifest.json")
        manifest.add_entry("out/StaticMesh/SM_Chair.stm", "StaticMesh/SM_Chair.stm", "StaticMesh")
        manifest.add_entry("out/Level01.map", "Level01.map", "Map", ["StaticMesh/SM_Chair.stm"])
        manifest.save()
    """

    def __init__(self, filepath: str, version: int = 1):
        self.filepath = filepath
        self.manifest = Manifest(version=version)
        self._by_file: Dict[str, ManifestEntry] = {}

    def add_entry(self, abs_path: str, rel_path: str, file_type: str,
                  dependencies: Optional[List[str]] = None) -> ManifestEntry:
        """
        参数:
            abs_path: 文件绝对路径，只用于计算 md5
            rel_path: 清单中记录的相对路径
            file_type: SceneObjectKind 的值，或 "Map"
            dependencies: 该文件引用的其他文件（相对路径）
        """
        entry = self._by_file.get(rel_path)
        if entry is None:
            entry = ManifestEntry(file=rel_path, file_type=file_type)
            self._by_file[rel_path] = entry
            self.manifest.entries.append(entry)

        entry.hash = FileManager.file_hash(abs_path)
        entry.dependencies.extend(d for d in dependencies or [] if d not in entry.dependencies)
        return entry

    def missing_dependencies(self) -> List[str]:
        """
        返回:
            被引用但不在清单中的文件，每项格式为 "引用方 -> 被引用文件"
        """
        return [
            f"{entry.file} -> {dep}"
            for entry in self.manifest.entries
            for dep in entry.dependencies
            if dep not in self._by_file
        ]

    def to_dict(self) -> dict:
        return {
            "version": self.manifest.version,
            "entries": [
                {"file": e.file, "type": e.file_type, "dependencies": list(e.dependencies), "hash": e.hash}
                for e in self.manifest.entries
            ],
        }

    def save(self) -> None:
        try:
            f = open(self.filepath, "w", encoding="utf-8")
        except OSError as e:
            raise OpenFailureError(f"cannot open '{self.filepath}' for writing: {e}") from e
        with f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
