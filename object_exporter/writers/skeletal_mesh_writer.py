# File: writers/skeletal_mesh_writer.py
# Purpose: 写入骨骼网格几何（.skm 二进制 / .json 文档）
# Notes:
# - 二进制布局与 .stm 完全相同，只是后缀不同
# - 骨架与动画由地图导出器分别导出到 Skeleton/ 与 AnimSequence/
# - JSON 文档额外记录所引用骨架的名称

from typing import Optional

from ..config.export_settings import ExportSettings
from ..core.geometry_codec import build_geometry_record, geometry_to_document, write_geometry_file
from ..core.host import HostScene
from ..core.schema import GeometryRecord, ResourceHandle, SceneObjectKind
from ..exporters.base_exporter import BaseExporter
from ..utils.logger import Logger
from ..utils.path_resolver import strip_container_path


class SkeletalMeshExporter(BaseExporter):

    kind = SceneObjectKind.SKELETAL_MESH

    def build_data(self, source: ResourceHandle, name: str) -> GeometryRecord:
        record = build_geometry_record(self.host, source, name)
        skeleton = self.host.get_skeleton_ref(source)
        if skeleton is not None:
            record.skeleton_name = strip_container_path(skeleton.identifier)
        return record

    def write_binary(self, record: GeometryRecord, path: str) -> None:
        write_geometry_file(path, record, self.settings.write_version_stamp)

    def to_document(self, record: GeometryRecord) -> dict:
        document = geometry_to_document(record)
        document["Skeleton"] = record.skeleton_name
        return document


def export_skeletal_mesh(host: HostScene, mesh: ResourceHandle, filepath: str,
                         settings: Optional[ExportSettings] = None,
                         logger: Optional[Logger] = None) -> bool:
    """
    便捷函数：导出骨骼网格几何（.skm 或 .json）
    """
    return SkeletalMeshExporter(host, settings, logger).export(mesh, filepath)
