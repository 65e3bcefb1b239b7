# File: writers/camera_writer.py
# Purpose: 写入相机（只有 .json 文档格式）
# Notes:
# - 位置 / 旋转取自相机组件的世界变换
# - 旋转以 roll / yaw / pitch（角度）写出
#   roll = 绕 X，pitch = 绕 Y，yaw = 绕 Z（XYZ 欧拉顺序）

import math
from typing import Any, Optional

from ..config.export_settings import ExportSettings
from ..core.host import HostScene
from ..core.io.json_writer import vector_to_json
from ..core.map_codec import camera_from_actor
from ..core.schema import CameraRecord, SceneObjectKind
from ..exporters.base_exporter import BaseExporter
from ..utils.logger import Logger


class CameraExporter(BaseExporter):

    kind = SceneObjectKind.CAMERA
    supports_binary = False

    def build_data(self, source: Any, name: str) -> CameraRecord:
        return camera_from_actor(self.host, source, self.settings.camera_look_at_distance)

    def to_document(self, record: CameraRecord) -> dict:
        euler = record.rotation.to_euler()
        return {
            "Camera": {
                "Location": vector_to_json(record.location),
                "Rotation": {
                    "roll": math.degrees(euler.x),
                    "yaw": math.degrees(euler.z),
                    "pitch": math.degrees(euler.y),
                },
                "FOV": record.fov,
                "AspectRatio": record.aspect_ratio,
            }
        }


def export_camera(host: HostScene, camera: Any, filepath: str,
                  settings: Optional[ExportSettings] = None,
                  logger: Optional[Logger] = None) -> bool:
    """
    便捷函数：导出相机（.json）
    """
    return CameraExporter(host, settings, logger).export(camera, filepath)
