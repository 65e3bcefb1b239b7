# -*- coding: utf-8 -*-
"""
导出配置数据类
构造时传入，不使用进程级全局单例
"""

import json
import os
from typing import Any, Dict, Optional

from ..core.schema import ExportFormat, SceneObjectKind
from .constants import (
    ANIMATION_SUBDIR,
    DEFAULT_LOG_CATEGORY,
    DEFAULT_LOOK_AT_DISTANCE,
    EXT_ANIMATION,
    EXT_JSON,
    EXT_SKELETAL_MESH,
    EXT_SKELETON,
    EXT_STATIC_MESH,
    SKELETAL_MESH_SUBDIR,
    SKELETON_SUBDIR,
    STATIC_MESH_SUBDIR,
    TEXTURES_SUBDIR,
)


class ExportSettings:
    """全局导出配置"""

    def __init__(self):
        # 二进制后缀（按资源类型）
        self.binary_suffixes: Dict[SceneObjectKind, str] = {
            SceneObjectKind.STATIC_MESH: EXT_STATIC_MESH,
            SceneObjectKind.SKELETAL_MESH: EXT_SKELETAL_MESH,
            SceneObjectKind.SKELETON: EXT_SKELETON,
            SceneObjectKind.ANIMATION_CLIP: EXT_ANIMATION,
        }
        self.json_suffix = EXT_JSON

        # 地图导出时，嵌套资源使用的格式
        self.nested_format = ExportFormat.BINARY

        # 固定子目录（相对于 .map 文件所在目录）
        self.subdirectories: Dict[SceneObjectKind, str] = {
            SceneObjectKind.STATIC_MESH: STATIC_MESH_SUBDIR,
            SceneObjectKind.SKELETAL_MESH: SKELETAL_MESH_SUBDIR,
            SceneObjectKind.SKELETON: SKELETON_SUBDIR,
            SceneObjectKind.ANIMATION_CLIP: ANIMATION_SUBDIR,
        }
        self.textures_subdir = TEXTURES_SUBDIR

        self.write_version_stamp = False
        self.skip_duplicate_exports = True
        self.export_textures = True
        self.write_manifest = True
        self.write_audit = False
        self.verbose = True
        self.log_category = DEFAULT_LOG_CATEGORY
        self.camera_look_at_distance = DEFAULT_LOOK_AT_DISTANCE

    def suffix_for(self, kind: SceneObjectKind, export_format: Optional[ExportFormat] = None) -> str:
        """资源类型 + 格式 → 文件后缀"""
        export_format = export_format or self.nested_format
        if export_format == ExportFormat.JSON:
            return self.json_suffix
        return self.binary_suffixes[kind]

    def format_for_path(self, kind: SceneObjectKind, path: str) -> Optional[ExportFormat]:
        """
        根据目标路径后缀选择编码格式

        返回:
            ExportFormat，后缀不被该资源类型支持时返回 None
        """
        ext = os.path.splitext(path)[1].lower()
        if ext and ext == self.json_suffix.lower():
            return ExportFormat.JSON
        binary_ext = self.binary_suffixes.get(kind)
        if ext and binary_ext and ext == binary_ext.lower():
            return ExportFormat.BINARY
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExportSettings":
        """从字典创建配置对象（未知键被忽略）"""
        settings = cls()
        for key in ("write_version_stamp", "skip_duplicate_exports", "export_textures",
                    "write_manifest", "write_audit", "verbose"):
            if key in data:
                setattr(settings, key, bool(data[key]))
        if "log_category" in data:
            settings.log_category = str(data["log_category"])
        if "camera_look_at_distance" in data:
            settings.camera_look_at_distance = float(data["camera_look_at_distance"])
        if "json_suffix" in data:
            settings.json_suffix = str(data["json_suffix"])
        if "textures_subdir" in data:
            settings.textures_subdir = str(data["textures_subdir"])
        if "nested_format" in data:
            settings.nested_format = ExportFormat(data["nested_format"])

        # {"StaticMesh": ".stm", ...}
        for kind_name, suffix in data.get("binary_suffixes", {}).items():
            settings.binary_suffixes[SceneObjectKind(kind_name)] = str(suffix)
        for kind_name, subdir in data.get("subdirectories", {}).items():
            settings.subdirectories[SceneObjectKind(kind_name)] = str(subdir)
        return settings

    @classmethod
    def from_file(cls, filepath: str) -> "ExportSettings":
        """从 JSON 配置文件创建配置对象"""
        with open(filepath, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))
