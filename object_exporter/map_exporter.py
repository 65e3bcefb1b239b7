# File: map_exporter.py
# Purpose: 地图导出器：枚举场景中的相机 / 灯光 / 静态网格 / 骨骼网格，写入 .map 并递归导出引用的资源
# Notes:
# - 状态机: Init → EmitCameras → EmitLights → EmitStaticMeshPlacements
#           → EmitSkeletalMeshPlacements → Close → Done
# - .map 文件无法打开时整个地图导出失败（Failed）
# - 嵌套资源导出失败只记录日志，不影响 .map 本身的完成
# - 资源标识无法解析时仍写入摆放记录（名称为空），该资源记为失败
# - actor 缺少预期组件属于调用方违约，直接断言失败
# - 单线程、同步、按 actor 类型深度优先

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .config.constants import EXT_AUDIT, EXT_MANIFEST, EXT_MAP
from .config.export_settings import ExportSettings
from .core.errors import ExportError, InvalidDestinationError, PartialWriteError
from .core.host import HostScene
from .core.io.binary_writer import BinaryFileWriter, BinaryWriter
from .core.map_codec import (
    camera_from_actor,
    encode_camera,
    encode_light,
    encode_map_header,
    encode_placement,
    light_from_actor,
)
from .core.schema import PlacementRecord, ResourceHandle, SceneObjectKind, SceneObjectRef
from .export_dispatcher import ExportDispatcher
from .utils.logger import Logger
from .utils.path_resolver import strip_container_path
from .validators.path_validator import validate_output_path
from .writers.audit_writer import AuditLogger
from .writers.manifest_writer import ManifestWriter


class MapExportState(Enum):
    INIT = "Init"
    EMIT_CAMERAS = "EmitCameras"
    EMIT_LIGHTS = "EmitLights"
    EMIT_STATIC_MESH_PLACEMENTS = "EmitStaticMeshPlacements"
    EMIT_SKELETAL_MESH_PLACEMENTS = "EmitSkeletalMeshPlacements"
    CLOSE = "Close"
    DONE = "Done"
    FAILED = "Failed"


@dataclass
class MapExportReport:
    """一次地图导出的结果"""
    map_path: str
    state: MapExportState = MapExportState.INIT
    camera_count: int = 0
    light_count: int = 0
    static_placement_count: int = 0
    skeletal_placement_count: int = 0
    exported_files: List[str] = field(default_factory=list)     # 成功写入的嵌套资源（绝对路径）
    failed_resources: List[str] = field(default_factory=list)   # 导出失败的嵌套资源（绝对路径，无法解析时为资源标识）
    message: str = ""

    @property
    def success(self) -> bool:
        return self.state == MapExportState.DONE


class _MapExportRun:
    """
    单次导出的临时状态（调度器、清单、去重表），导出结束即丢弃
    """

    def __init__(self, host: HostScene, settings: ExportSettings, logger: Logger,
                 output_dir: str, report: MapExportReport):
        self.settings = settings
        self.logger = logger
        self.report = report
        self.dispatcher = ExportDispatcher(host, settings, logger, output_dir)
        self.manifest = ManifestWriter(os.path.join(output_dir, EXT_MANIFEST)) if settings.write_manifest else None
        self.attempted: Dict[str, bool] = {}
        self.owners: Dict[str, str] = {}     # 输出路径 → 首个解析到该路径的资源标识
        self.map_dependencies: List[str] = []


class MapExporter:
    """
    MapExporter
    -----------
    使用方式:
        exporter = MapExporter(host, settings, logger)
        ok = exporter.export_map("out/Level01.map")

        # 或者获取详细报告
        report = exporter.run("out/Level01.map")
    """

    def __init__(self, host: HostScene, settings: Optional[ExportSettings] = None,
                 logger: Optional[Logger] = None):
        self.host = host
        self.settings = settings or ExportSettings()
        self.logger = logger or Logger.from_settings(self.settings)

    def export_map(self, filepath: str) -> bool:
        return self.run(filepath).success

    def run(self, filepath: str) -> MapExportReport:
        report = MapExportReport(map_path=filepath)

        try:
            validate_output_path(filepath, [EXT_MAP])
        except InvalidDestinationError as e:
            return self._fail(report, e)

        output_dir = os.path.dirname(os.path.abspath(filepath))
        audit = AuditLogger(os.path.join(output_dir, EXT_AUDIT)) if self.settings.write_audit else None
        logger = self.logger
        if audit is not None:
            logger = Logger(audit_logger=audit, verbose=self.logger.verbose, category=self.logger.category)

        run = _MapExportRun(self.host, self.settings, logger, output_dir, report)
        logger.info(f"开始导出地图: {filepath}")

        try:
            with BinaryFileWriter(filepath) as binw:
                encode_map_header(binw, self.settings.write_version_stamp)

                report.state = MapExportState.EMIT_CAMERAS
                report.camera_count = self._emit_cameras(binw)

                report.state = MapExportState.EMIT_LIGHTS
                report.light_count = self._emit_lights(binw)

                report.state = MapExportState.EMIT_STATIC_MESH_PLACEMENTS
                report.static_placement_count = self._emit_placements(
                    binw, run, SceneObjectKind.STATIC_MESH)

                report.state = MapExportState.EMIT_SKELETAL_MESH_PLACEMENTS
                report.skeletal_placement_count = self._emit_placements(
                    binw, run, SceneObjectKind.SKELETAL_MESH)

                report.state = MapExportState.CLOSE
        except ExportError as e:
            self._fail(report, e, logger)
        except OSError as e:
            self._fail(report, PartialWriteError(f"写入 .map 中途失败: {e}"), logger)
        else:
            report.state = MapExportState.DONE
            logger.info(
                f"地图导出完成: cameras={report.camera_count} lights={report.light_count} "
                f"static={report.static_placement_count} skeletal={report.skeletal_placement_count} "
                f"failed_resources={len(report.failed_resources)}"
            )
            if run.manifest is not None:
                self._save_manifest(run, filepath)

        if audit is not None:
            try:
                audit.save()
            except ExportError as e:
                self.logger.warning(str(e), code=e.code)

        return report

    # ====== Sections ======

    def _emit_cameras(self, binw: BinaryWriter) -> int:
        actors = list(self.host.list_actors_of_kind(SceneObjectKind.CAMERA))
        binw.write_i32(len(actors))
        for actor in actors:
            encode_camera(binw, camera_from_actor(self.host, actor, self.settings.camera_look_at_distance))
        return len(actors)

    def _emit_lights(self, binw: BinaryWriter) -> int:
        actors = list(self.host.list_actors_of_kind(SceneObjectKind.DIRECTIONAL_LIGHT))
        binw.write_i32(len(actors))
        for actor in actors:
            encode_light(binw, light_from_actor(self.host, actor))
        return len(actors)

    def _emit_placements(self, binw: BinaryWriter, run: _MapExportRun, kind: SceneObjectKind) -> int:
        """
        写入摆放记录，并为每个摆放触发引用资源的导出
        """
        actors = list(self.host.list_actors_of_kind(kind))
        binw.write_i32(len(actors))
        for actor in actors:
            transform = self.host.get_transform(actor)
            handle = self.host.get_resource_ref(actor)
            assert handle is not None, f"{kind.value} actor {actor!r} has no mesh component"

            ref = self._resolve(run, handle)
            encode_placement(binw, PlacementRecord(
                rotation=transform.rotation,
                location=transform.location,
                resource_name=ref.name if ref is not None else strip_container_path(handle.identifier),
            ))

            if ref is None:
                continue
            if kind == SceneObjectKind.SKELETAL_MESH:
                self._export_skeletal_dependencies(run, actor, ref)
            else:
                self._export_nested(run, ref)
        return len(actors)

    # ====== Nested exports ======

    def _export_skeletal_dependencies(self, run: _MapExportRun, actor: Any, mesh_ref: SceneObjectRef) -> None:
        dependencies = []

        skeleton = self.host.get_skeleton_ref(mesh_ref.handle)
        if skeleton is not None:
            skeleton_ref = self._resolve(run, skeleton)
            if skeleton_ref is not None and self._export_nested(run, skeleton_ref):
                dependencies.append(run.dispatcher.relative(skeleton_ref.path))
        else:
            run.logger.warning("骨骼网格没有骨架", mesh_ref.name)

        animation = self.host.get_active_animation_ref(actor)
        if animation is not None:
            animation_ref = self._resolve(run, animation)
            if animation_ref is not None and self._export_nested(run, animation_ref):
                dependencies.append(run.dispatcher.relative(animation_ref.path))

        self._export_nested(run, mesh_ref, dependencies)

    def _export_nested(self, run: _MapExportRun, ref: SceneObjectRef,
                       dependencies: Optional[List[str]] = None) -> bool:
        """
        导出嵌套资源；失败只记录，不向上传播
        """
        owner = run.owners.setdefault(ref.path, ref.handle.identifier if ref.handle else ref.name)
        if ref.handle is not None and owner != ref.handle.identifier:
            run.logger.warning(
                f"不同资源解析到同一路径: {ref.handle.identifier} 与 {owner} -> {ref.path}", ref.name)

        if ref.path in run.attempted and self.settings.skip_duplicate_exports:
            ok = run.attempted[ref.path]
        else:
            ok = run.dispatcher.dispatch(ref)
            run.attempted[ref.path] = ok
            if ok:
                run.report.exported_files.append(ref.path)
                if ref.kind in (SceneObjectKind.STATIC_MESH, SceneObjectKind.SKELETAL_MESH) \
                        and self.settings.export_textures:
                    run.dispatcher.export_textures(ref)
            else:
                run.report.failed_resources.append(ref.path)
                run.logger.warning(f"嵌套导出失败，已跳过: {ref.path}", ref.name)

        if ok:
            rel_path = run.dispatcher.relative(ref.path)
            if rel_path not in run.map_dependencies:
                run.map_dependencies.append(rel_path)
            if run.manifest is not None:
                run.manifest.add_entry(ref.path, rel_path, ref.kind.value, dependencies)
        return ok

    # ====== Helpers ======

    def _resolve(self, run: _MapExportRun, handle: ResourceHandle) -> Optional[SceneObjectRef]:
        """
        解析资源句柄；无法解析时记为失败资源并返回 None
        """
        try:
            return run.dispatcher.resolve(handle)
        except ExportError as e:
            run.report.failed_resources.append(handle.identifier)
            run.logger.warning(f"资源无法解析，已跳过: {e}", handle.identifier, code=e.code)
            return None

    def _save_manifest(self, run: _MapExportRun, filepath: str) -> None:
        map_rel = run.dispatcher.relative(filepath)
        run.manifest.add_entry(filepath, map_rel, "Map", run.map_dependencies)
        for missing in run.manifest.missing_dependencies():
            run.logger.warning(f"清单依赖缺失: {missing}", map_rel)
        try:
            run.manifest.save()
        except ExportError as e:
            run.logger.warning(str(e), code=e.code)

    def _fail(self, report: MapExportReport, error: ExportError,
              logger: Optional[Logger] = None) -> MapExportReport:
        report.state = MapExportState.FAILED
        report.message = str(error)
        (logger or self.logger).error(f"ExportMap: failed. {error}", report.map_path, code=error.code)
        return report
