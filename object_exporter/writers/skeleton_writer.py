# File: writers/skeleton_writer.py
# Purpose: 写入骨架（.skt 二进制 / .json 文档）
# Notes:
# - 骨骼信息与绑定姿态是两个数量独立的数组
# - JSON 文档按骨骼展开（名称、父索引、绑定姿态）

from typing import Optional

from ..config.export_settings import ExportSettings
from ..core.host import HostScene
from ..core.schema import ResourceHandle, SceneObjectKind, SkeletonRecord
from ..core.skeleton_codec import build_skeleton_record, skeleton_to_document, write_skeleton_file
from ..exporters.base_exporter import BaseExporter
from ..utils.logger import Logger


class SkeletonExporter(BaseExporter):

    kind = SceneObjectKind.SKELETON

    def build_data(self, source: ResourceHandle, name: str) -> SkeletonRecord:
        return build_skeleton_record(self.host, source, name)

    def write_binary(self, record: SkeletonRecord, path: str) -> None:
        write_skeleton_file(path, record, self.settings.write_version_stamp)

    def to_document(self, record: SkeletonRecord) -> dict:
        return skeleton_to_document(record)


def export_skeleton(host: HostScene, skeleton: ResourceHandle, filepath: str,
                    settings: Optional[ExportSettings] = None,
                    logger: Optional[Logger] = None) -> bool:
    """
    便捷函数：导出骨架（.skt 或 .json）
    """
    return SkeletonExporter(host, settings, logger).export(skeleton, filepath)
