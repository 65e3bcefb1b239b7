# -*- coding: utf-8 -*-
"""
ObjectExporter - Structure Checker
导出产物的结构校验器
- 二进制结构校验（.stm / .skm / .skt / .anm / .map），按后缀选择解码器
- 几何记录后置校验（validate_*）
"""

from typing import Callable, Dict, List
import os

from ..config.constants import (
    EXT_ANIMATION,
    EXT_MAP,
    EXT_SKELETAL_MESH,
    EXT_SKELETON,
    EXT_STATIC_MESH,
    MAX_INDEX_VALUE,
)
from ..core.animation_codec import decode_animation
from ..core.errors import FormatError
from ..core.geometry_codec import decode_geometry
from ..core.io.binary_reader import BinaryReader
from ..core.map_codec import decode_map
from ..core.schema import GeometryRecord
from ..core.skeleton_codec import decode_skeleton

# ========== 二进制结构校验（文件级） ==========

class StructureChecker:
    def __init__(self, verbose: bool = False, version_stamp: bool = False):
        self.verbose = verbose
        self.version_stamp = version_stamp

        self.decoders: Dict[str, Callable] = {
            EXT_STATIC_MESH: decode_geometry,
            EXT_SKELETAL_MESH: decode_geometry,
            EXT_SKELETON: decode_skeleton,
            EXT_ANIMATION: decode_animation,
            EXT_MAP: decode_map,
        }

    def check_file(self, filepath: str) -> Dict:
        report = {
            "filepath": filepath,
            "counts": {},
            "errors": [],
            "warnings": []
        }

        ext = os.path.splitext(filepath)[1].lower()
        decoder = self.decoders.get(ext)
        if decoder is None:
            report["errors"].append(f"不支持的文件类型: {ext or '(无后缀)'}")
            return report

        try:
            reader = BinaryReader.from_file(filepath)
        except OSError as e:
            report["errors"].append(f"无法读取文件: {e}")
            return report

        try:
            record = decoder(reader, self.version_stamp)
        except FormatError as e:
            report["errors"].append(f"文件结构错误: {e}")
            return report

        if not reader.at_end():
            report["errors"].append(f"记录末尾多出 {reader.remaining} 字节")

        if ext in (EXT_STATIC_MESH, EXT_SKELETAL_MESH):
            self._check_geometry(record, report)
        elif ext == EXT_SKELETON:
            self._check_skeleton(record, report)
        elif ext == EXT_ANIMATION:
            report["counts"]["tracks"] = record.track_count
            if record.track_count == 0:
                report["warnings"].append("动画没有任何轨道")
        else:
            report["counts"].update({
                "cameras": len(record.cameras),
                "lights": len(record.lights),
                "static_placements": len(record.static_placements),
                "skeletal_placements": len(record.skeletal_placements),
            })

        if self.verbose:
            print(f"[StructureChecker] {filepath}: {len(report['errors'])} errors, "
                  f"{len(report['warnings'])} warnings")
        return report

    def _check_geometry(self, record: GeometryRecord, report: Dict) -> None:
        report["counts"]["vertices"] = record.vertex_count
        report["counts"]["indices"] = record.index_count
        for validate in (validate_index_range, validate_triangle_list):
            try:
                validate(record)
            except ValueError as e:
                report["errors"].append(str(e))
        if record.vertex_count == 0:
            report["warnings"].append("网格没有顶点")

    def _check_skeleton(self, record, report: Dict) -> None:
        report["counts"]["bone_infos"] = len(record.bone_infos)
        report["counts"]["bone_poses"] = len(record.bone_poses)
        if not record.is_aligned():
            report["errors"].append(
                f"骨骼信息数量 {len(record.bone_infos)} 与绑定姿态数量 {len(record.bone_poses)} 不一致"
            )
        for i, info in enumerate(record.bone_infos):
            if info.parent_index < -1 or info.parent_index >= len(record.bone_infos):
                report["errors"].append(f"骨骼 {info.name} (#{i}) 父索引越界: {info.parent_index}")


# ========== 几何记录后置校验 ==========

def validate_index_range(record: GeometryRecord) -> bool:
    for index in record.indices:
        if index > MAX_INDEX_VALUE:
            raise ValueError(f"索引 {index} 超出 16 位范围")
        if index < 0 or index >= record.vertex_count:
            raise ValueError(f"索引 {index} 越界（顶点数 {record.vertex_count}）")
    return True


def validate_triangle_list(record: GeometryRecord) -> bool:
    if record.index_count % 3 != 0:
        raise ValueError(f"索引数量 {record.index_count} 不是 3 的倍数，拓扑错误")
    return True


def check_files(filepaths: List[str], version_stamp: bool = False) -> Dict[str, Dict]:
    """
    批量校验导出目录中的文件

    返回:
        {文件路径: 报告}
    """
    checker = StructureChecker(version_stamp=version_stamp)
    return {path: checker.check_file(path) for path in filepaths}
