# File: __init__.py
# Purpose: ObjectExporter 主入口
# Notes:
# - 地图导出（MapExporter）
# - 单个资源导出（export_static_mesh / export_skeletal_mesh / export_skeleton / export_animation / export_camera）
# - 宿主场景通过 HostScene 接入，不直接依赖任何引擎 API

__version__ = "1.0.0"

from .config.export_settings import ExportSettings
from .core.errors import ExportError
from .core.host import HostScene
from .core.schema import ExportFormat, ResourceHandle, SceneObjectKind, Transform
from .map_exporter import MapExporter, MapExportReport, MapExportState
from .utils.logger import Logger
from .writers import (
    export_animation,
    export_camera,
    export_skeletal_mesh,
    export_skeleton,
    export_static_mesh,
)

__all__ = [
    'ExportSettings',
    'ExportError',
    'HostScene',
    'ExportFormat',
    'ResourceHandle',
    'SceneObjectKind',
    'Transform',
    'MapExporter',
    'MapExportReport',
    'MapExportState',
    'Logger',
    'export_static_mesh',
    'export_skeletal_mesh',
    'export_skeleton',
    'export_animation',
    'export_camera',
]
