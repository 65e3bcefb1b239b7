# File: writers/animation_writer.py
# Purpose: 写入动画片段（.anm 二进制 / .json 文档）
# Notes:
# - 轨道按骨架骨骼顺序排列，每根骨骼一条
# - 原样导出源关键帧（不重采样、不插值）
# - 同一轨道内 scale / rotation / position 关键帧数量可以不同

from typing import Optional

from ..config.export_settings import ExportSettings
from ..core.animation_codec import animation_to_document, build_animation_record, write_animation_file
from ..core.host import HostScene
from ..core.schema import AnimationRecord, ResourceHandle, SceneObjectKind
from ..exporters.base_exporter import BaseExporter
from ..utils.logger import Logger


class AnimationExporter(BaseExporter):
    """
    AnimationExporter
    -----------------
    使用方式:
        exporter = AnimationExporter(host, settings, logger)
        ok = exporter.export(clip_handle, "out/SkeletalMesh/AnimSequence/Walk.anm")
    """

    kind = SceneObjectKind.ANIMATION_CLIP

    def build_data(self, source: ResourceHandle, name: str) -> AnimationRecord:
        return build_animation_record(self.host, source, name)

    def write_binary(self, record: AnimationRecord, path: str) -> None:
        write_animation_file(path, record, self.settings.write_version_stamp)

    def to_document(self, record: AnimationRecord) -> dict:
        return animation_to_document(record)


def export_animation(host: HostScene, animation: ResourceHandle, filepath: str,
                     settings: Optional[ExportSettings] = None,
                     logger: Optional[Logger] = None) -> bool:
    """
    便捷函数：导出动画片段（.anm 或 .json）
    """
    return AnimationExporter(host, settings, logger).export(animation, filepath)
