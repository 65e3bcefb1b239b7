# -*- coding: utf-8 -*-
"""
基础导出器（抽象类）
定义单个场景对象的导出流程模板
"""

import os
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..config.export_settings import ExportSettings
from ..core.errors import (
    ExportError,
    InvalidDestinationError,
    MissingResourceError,
    PartialWriteError,
)
from ..core.host import HostScene
from ..core.io.json_writer import JsonDocumentWriter
from ..core.schema import ExportFormat, ResourceHandle, SceneObjectKind
from ..utils.file_manager import FileManager
from ..utils.logger import Logger
from ..utils.path_resolver import strip_container_path
from ..validators.path_validator import validate_output_path


class BaseExporter(ABC):
    """
    基础导出器
    使用模板方法模式定义导出流程:

        validate → build_data → write_files → post_process

    - 所有校验（目标路径、源资源、编码范围）都在打开目标文件之前完成
    - 失败统一返回 False 并记录诊断信息；不做重试
    - 目标文件打开之后的失败不回滚已写入的字节，调用方必须丢弃该文件
    """

    kind: SceneObjectKind = None
    supports_binary: bool = True

    def __init__(self, host: HostScene, settings: Optional[ExportSettings] = None,
                 logger: Optional[Logger] = None):
        """
        参数:
            host: HostScene - 宿主场景接口
            settings: ExportSettings - 导出配置
            logger: Logger - 日志记录器
        """
        self.host = host
        self.settings = settings or ExportSettings()
        self.logger = logger or Logger.from_settings(self.settings)

    @property
    def label(self) -> str:
        return f"Export{self.kind.value}"

    def export(self, source: Any, path: str) -> bool:
        """
        导出流程模板方法

        参数:
            source: 资源句柄（相机为相机 actor）
            path: 目标文件路径，后缀决定编码方式

        返回:
            bool - 是否成功
        """
        name = self.source_name(source, path)
        opened = False
        try:
            # 1. 验证
            export_format = self.validate(source, path)

            # 2. 构建数据
            record = self.build_data(source, name)

            # 3. 写入文件
            opened = True
            self.write_files(record, path, export_format)

            # 4. 后处理
            self.post_process(path, name)
            return True

        except ExportError as e:
            self._report_failure(e, name)
            return False
        except OSError as e:
            if not opened:
                raise
            self._report_failure(PartialWriteError(f"写入中途失败: {e}", name), name)
            return False

    def source_name(self, source: Any, path: str) -> str:
        if isinstance(source, ResourceHandle):
            return strip_container_path(source.identifier)
        if isinstance(path, str) and path:
            return os.path.splitext(os.path.basename(path))[0]
        return ""

    def validate(self, source: Any, path: str) -> ExportFormat:
        """
        验证目标路径和源资源

        返回:
            ExportFormat - 由目标后缀选择的编码方式
        """
        allowed = [self.settings.json_suffix]
        if self.supports_binary:
            allowed.append(self.settings.suffix_for(self.kind, ExportFormat.BINARY))
        validate_output_path(path, allowed)

        export_format = self.settings.format_for_path(self.kind, path)
        if export_format is None or (export_format == ExportFormat.BINARY and not self.supports_binary):
            raise InvalidDestinationError(f"{self.kind.value} 不支持的目标后缀: {path}")

        if source is None:
            raise MissingResourceError(f"{self.kind.value} 源资源为空")
        return export_format

    @abstractmethod
    def build_data(self, source: Any, name: str):
        """
        构建导出记录（子类实现）。编码范围检查必须在这里完成。
        """

    def write_files(self, record, path: str, export_format: ExportFormat) -> None:
        if export_format == ExportFormat.JSON:
            writer = JsonDocumentWriter(path)
            root = writer.create_root()
            root.update(self.to_document(record))
            writer.save()
        else:
            self.write_binary(record, path)

    def write_binary(self, record, path: str) -> None:
        raise InvalidDestinationError(f"{self.kind.value} 没有二进制格式")

    @abstractmethod
    def to_document(self, record) -> dict:
        """JSON 文档主体（不含 FileVersion）"""

    def post_process(self, path: str, name: str) -> None:
        """
        后处理（可选，子类可覆盖）
        """
        size = FileManager.get_file_size(path)
        self.logger.info(f"{self.label}: success ({size} 字节) -> {path}", name)

    def _report_failure(self, error: ExportError, name: str) -> None:
        self.logger.warning(f"{self.label}: failed. {error}", name or error.object_name, code=error.code)
