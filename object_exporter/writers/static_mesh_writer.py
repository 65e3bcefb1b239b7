# File: writers/static_mesh_writer.py
# Purpose: 写入静态网格（.stm 二进制 / .json 文档）
# Notes:
# - 只导出 LOD 0，其余 LOD 丢弃
# - 几何编码与骨骼网格共用 core/geometry_codec.py
# - 索引超出 16 位时在打开文件前失败，不写入任何字节

from typing import Optional

from ..config.export_settings import ExportSettings
from ..core.geometry_codec import build_geometry_record, geometry_to_document, write_geometry_file
from ..core.host import HostScene
from ..core.schema import GeometryRecord, ResourceHandle, SceneObjectKind
from ..exporters.base_exporter import BaseExporter
from ..utils.logger import Logger


class StaticMeshExporter(BaseExporter):
    """
    StaticMeshExporter
    ------------------
    使用方式:
        exporter = StaticMeshExporter(host, settings, logger)
        ok = exporter.export(mesh_handle, "out/StaticMesh/SM_Chair.stm")
    """

    kind = SceneObjectKind.STATIC_MESH

    def build_data(self, source: ResourceHandle, name: str) -> GeometryRecord:
        return build_geometry_record(self.host, source, name)

    def write_binary(self, record: GeometryRecord, path: str) -> None:
        write_geometry_file(path, record, self.settings.write_version_stamp)

    def to_document(self, record: GeometryRecord) -> dict:
        return geometry_to_document(record)


def export_static_mesh(host: HostScene, mesh: ResourceHandle, filepath: str,
                       settings: Optional[ExportSettings] = None,
                       logger: Optional[Logger] = None) -> bool:
    """
    便捷函数：导出静态网格

    参数:
        host: 宿主场景接口
        mesh: 静态网格资源句柄
        filepath: 输出文件路径（.stm 或 .json）

    返回:
        是否成功
    """
    return StaticMeshExporter(host, settings, logger).export(mesh, filepath)
