# File: utils/path_resolver.py
# Purpose: 资源名解析与确定性输出路径计算
# Notes:
# - 资源名 = 完整限定名去掉容器路径前缀（"/Game/Props/SM_Chair.SM_Chair" → "SM_Chair"）
# - 输出路径 = 导出根目录 / 固定子目录 / 资源名 + 后缀
# - 同一资源总是解析到同一路径（重复导出只是覆盖写入）
# - 清单中的相对路径统一使用正斜杠 `/`

import os
from typing import Optional

from ..config.export_settings import ExportSettings
from ..core.errors import MissingResourceError
from ..core.schema import ExportFormat, ResourceHandle, SceneObjectRef


def strip_container_path(identifier: str) -> str:
    """
    去掉容器路径前缀

    参数:
        identifier: 完整限定名，例如 "/Game/Props/SM_Chair.SM_Chair"

    返回:
        资源名，例如 "SM_Chair"

    示例:
        "/Game/Props/SM_Chair.SM_Chair"        → "SM_Chair"
        "/Game/Chars/Hero.Hero:Skeleton_0"     → "Skeleton_0"
        "SM_Rock"                              → "SM_Rock"
    """
    name = identifier.replace('\\', '/').rstrip('/')
    name = name.rsplit('/', 1)[-1]
    for sep in (':', '.'):
        if sep in name:
            name = name.rsplit(sep, 1)[-1]
    return name


class PathResolver:
    """
    路径解析器

    职责：
    1. 资源句柄 → SceneObjectRef（名称 + 确定性输出路径）
    2. 绝对路径 → 相对路径（相对于导出根目录，正斜杠）

    使用方式:
        resolver = PathResolver("D:/export/Level01", settings)
        ref = resolver.resolve(handle)
        # ref.path == "D:/export/Level01/StaticMesh/SM_Chair.stm"
    """

    def __init__(self, root_path: str, settings: ExportSettings):
        self.root_path = os.path.abspath(root_path)
        self.settings = settings

    def directory_for(self, handle: ResourceHandle) -> str:
        subdir = self.settings.subdirectories[handle.kind]
        return os.path.join(self.root_path, *subdir.split('/'))

    def textures_directory(self) -> str:
        return os.path.join(self.root_path, *self.settings.textures_subdir.split('/'))

    def resolve(self, handle: ResourceHandle, export_format: Optional[ExportFormat] = None) -> SceneObjectRef:
        """
        资源句柄 → SceneObjectRef
        """
        name = strip_container_path(handle.identifier)
        if not name:
            raise MissingResourceError(f"资源标识无法解析出名称: {handle.identifier!r}")
        suffix = self.settings.suffix_for(handle.kind, export_format)
        path = os.path.join(self.directory_for(handle), name + suffix)
        return SceneObjectRef(kind=handle.kind, name=name, path=path, handle=handle)

    def to_relative(self, abs_path: str) -> str:
        """
        转换绝对路径为相对路径（正斜杠分隔）

        路径不在根目录下时返回文件名
        """
        try:
            rel_path = os.path.relpath(os.path.abspath(abs_path), self.root_path)
        except ValueError:
            return os.path.basename(abs_path)
        if rel_path.startswith('..'):
            return os.path.basename(abs_path)
        return rel_path.replace(os.sep, '/')
