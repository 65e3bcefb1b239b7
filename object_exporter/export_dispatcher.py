# File: export_dispatcher.py
# Purpose: 导出调度器，根据资源类型选择对应的编码器
# Notes:
# - StaticMesh → .stm，SkeletalMesh → .skm，Skeleton → .skt，AnimationClip → .anm
# - 输出路径由 PathResolver 确定性计算（导出根目录 / 固定子目录 / 资源名 + 后缀）
# - 子目录在调用编码器前创建

import os
from typing import Dict, Optional, Type

from .config.export_settings import ExportSettings
from .core.errors import OpenFailureError
from .core.host import HostScene
from .core.schema import ExportFormat, ResourceHandle, SceneObjectKind, SceneObjectRef
from .exporters.base_exporter import BaseExporter
from .utils.file_manager import FileManager
from .utils.logger import Logger
from .utils.path_resolver import PathResolver
from .writers.animation_writer import AnimationExporter
from .writers.audit_writer import ErrorCode
from .writers.skeletal_mesh_writer import SkeletalMeshExporter
from .writers.skeleton_writer import SkeletonExporter
from .writers.static_mesh_writer import StaticMeshExporter


EXPORTERS: Dict[SceneObjectKind, Type[BaseExporter]] = {
    SceneObjectKind.STATIC_MESH: StaticMeshExporter,
    SceneObjectKind.SKELETAL_MESH: SkeletalMeshExporter,
    SceneObjectKind.SKELETON: SkeletonExporter,
    SceneObjectKind.ANIMATION_CLIP: AnimationExporter,
}


class ExportDispatcher:
    """
    ExportDispatcher
    ----------------
    导出调度器，负责：
    1. 资源句柄 → SceneObjectRef（名称 + 输出路径）
    2. 创建输出子目录
    3. 调用对应编码器写入文件

    使用方式:
        dispatcher = ExportDispatcher(host, settings, logger, output_dir)
        ref = dispatcher.resolve(handle)
        ok = dispatcher.dispatch(ref)
    """

    def __init__(self, host: HostScene, settings: ExportSettings, logger: Logger, output_dir: str):
        self.host = host
        self.settings = settings
        self.logger = logger
        self.output_dir = output_dir
        self.path_resolver = PathResolver(output_dir, settings)
        self._exporters: Dict[SceneObjectKind, BaseExporter] = {
            kind: exporter_cls(host, settings, logger) for kind, exporter_cls in EXPORTERS.items()
        }

    def resolve(self, handle: ResourceHandle, export_format: Optional[ExportFormat] = None) -> SceneObjectRef:
        return self.path_resolver.resolve(handle, export_format)

    def dispatch(self, ref: SceneObjectRef) -> bool:
        """
        导出单个资源

        返回:
            导出是否成功
        """
        exporter = self._exporters.get(ref.kind)
        if exporter is None:
            self.logger.error(f"没有 {ref.kind.value} 类型的编码器", ref.name)
            return False

        try:
            FileManager.ensure_directory(ref.path)
        except OSError as e:
            error = OpenFailureError(f"无法创建输出目录 {os.path.dirname(ref.path)}: {e}", ref.name)
            self.logger.warning(str(error), ref.name, code=error.code)
            return False

        return exporter.export(ref.handle, ref.path)

    def export_textures(self, ref: SceneObjectRef) -> bool:
        """
        委托宿主导出网格使用的纹理（Textures/ 子目录）
        """
        directory = self.path_resolver.textures_directory()
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            self.logger.warning(f"无法创建纹理目录 {directory}: {e}", ref.name, code=ErrorCode.TEX001)
            return False

        if not self.host.export_texture_assets(ref.handle, directory):
            self.logger.warning("纹理导出失败", ref.name, code=ErrorCode.TEX001)
            return False
        return True

    def relative(self, path: str) -> str:
        return self.path_resolver.to_relative(path)
