# File: writers/audit_writer.py
# Purpose: audit.log 写入器，按顺序记录一次导出中的每条诊断
# Notes:
# - 每条记录带错误码（与 core/errors.py 中异常的 code 一致），INFO 没有错误码
# - 文件头写入汇总计数，便于不读全文就判断导出是否干净
# - 只有调用 save() 时才落盘

import time
from collections import Counter
from typing import List, Optional

from ..core.errors import (
    EncodingOverflowError,
    FormatError,
    InvalidDestinationError,
    MissingResourceError,
    OpenFailureError,
    PartialWriteError,
)
from ..core.schema import AuditEntry

SEVERITIES = ("ERROR", "WARNING", "INFO")


class ErrorCode:
    """审计错误码"""

    DST001 = InvalidDestinationError.code
    RES001 = MissingResourceError.code
    IO001 = OpenFailureError.code
    IO002 = PartialWriteError.code
    ENC001 = EncodingOverflowError.code
    FMT001 = FormatError.code
    TEX001 = "TEX001"  # 宿主纹理导出失败，不影响网格本身


class AuditLogger:
    """
    AuditLogger
    -----------
    通常不直接调用，而是绑定到 Logger 上:

        audit = AuditLogger("out/audit.log")
        logger = Logger(audit_logger=audit)
        logger.warning("索引超出 16 位范围", "SM_Rock", code=ErrorCode.ENC001)
        audit.save()
    """

    def __init__(self, filepath: str):
        self.filepath = filepath
        self.entries: List[AuditEntry] = []

    def record(self, severity: str, message: str, object_name: Optional[str] = None, code: str = "") -> None:
        if severity not in SEVERITIES:
            raise ValueError(f"unknown severity {severity!r}")
        self.entries.append(AuditEntry(
            code=code,
            message=message,
            severity=severity,
            object_name=object_name,
            timestamp=time.strftime("%Y-%m-%d %H:%M:%S", time.localtime()),
        ))

    def counts(self) -> Counter:
        return Counter(entry.severity for entry in self.entries)

    def has_errors(self) -> bool:
        return self.counts()["ERROR"] > 0

    def codes(self) -> List[str]:
        """按记录顺序返回所有错误码"""
        return [entry.code for entry in self.entries if entry.code]

    def get_summary(self) -> str:
        counts = self.counts()
        return f"导出完成: {counts['ERROR']} 错误, {counts['WARNING']} 警告, {counts['INFO']} 信息"

    @staticmethod
    def format_entry(entry: AuditEntry) -> str:
        parts = [f"[{entry.timestamp}]", f"[{entry.severity}]"]
        if entry.code:
            parts.append(f"[{entry.code}]")
        parts.append(entry.message)
        text = " ".join(parts)
        if entry.object_name:
            text += f" | Object: {entry.object_name}"
        return text

    def save(self) -> None:
        try:
            f = open(self.filepath, "w", encoding="utf-8")
        except OSError as e:
            raise OpenFailureError(f"cannot open '{self.filepath}' for writing: {e}") from e
        with f:
            f.write("# ObjectExporter audit log\n")
            f.write(f"# {self.get_summary()}\n\n")
            f.writelines(self.format_entry(entry) + "\n" for entry in self.entries)
