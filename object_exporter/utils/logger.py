# File: utils/logger.py
# Purpose: 导出流程统一日志
# Notes:
# - 每行: [时间] [分类] [级别] 消息 | Context: 对象名
# - ERROR 写 stderr，其余写 stdout；verbose=False 时不输出到控制台
# - 绑定 AuditLogger 后，每条日志连同错误码同时进入 audit.log

import sys
import time
from typing import Optional, TYPE_CHECKING

from ..config.constants import DEFAULT_LOG_CATEGORY

if TYPE_CHECKING:
    from ..writers.audit_writer import AuditLogger


class Logger:
    """
    Logger
    ------
    编码器、调度器和地图导出器共用的日志入口。
    分类前缀来自 ExportSettings.log_category。
    """

    def __init__(self, audit_logger: Optional["AuditLogger"] = None, verbose: bool = True,
                 category: str = DEFAULT_LOG_CATEGORY):
        self.audit_logger = audit_logger
        self.verbose = verbose
        self.category = category

    @classmethod
    def from_settings(cls, settings, audit_logger: Optional["AuditLogger"] = None) -> "Logger":
        return cls(audit_logger=audit_logger, verbose=settings.verbose, category=settings.log_category)

    def format_line(self, level: str, message: str, context: Optional[str] = None) -> str:
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        line = f"[{stamp}] [{self.category}] [{level}] {message}"
        return f"{line} | Context: {context}" if context else line

    def emit(self, level: str, message: str, context: Optional[str] = None, code: str = "") -> None:
        if self.verbose:
            stream = sys.stderr if level == "ERROR" else sys.stdout
            print(self.format_line(level, message, context), file=stream)
        if self.audit_logger is not None:
            self.audit_logger.record(level, message, context, code)

    def info(self, message: str, context: Optional[str] = None) -> None:
        self.emit("INFO", message, context)

    def warning(self, message: str, context: Optional[str] = None, code: str = "") -> None:
        self.emit("WARNING", message, context, code)

    def error(self, message: str, context: Optional[str] = None, code: str = "") -> None:
        self.emit("ERROR", message, context, code)
