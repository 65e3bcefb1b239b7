# File: core/errors.py
# Purpose: 导出流水线内部异常
# Notes:
# - 在 codec / writer 内部抛出，在编码器边界捕获并转换为 False + 日志
# - 每个异常带有审计错误码（见 writers/audit_writer.py 的 ErrorCode）


class ExportError(Exception):
    """导出错误基类"""
    code = "EXP000"

    def __init__(self, message: str, object_name: str = ""):
        super().__init__(message)
        self.object_name = object_name


class InvalidDestinationError(ExportError):
    """目标路径校验失败，未进行任何 I/O"""
    code = "DST001"


class MissingResourceError(ExportError):
    """源资源为空或缺失，未进行任何 I/O"""
    code = "RES001"


class OpenFailureError(ExportError):
    """目标文件无法创建"""
    code = "IO001"


class EncodingOverflowError(ExportError):
    """数据超出固定宽度字段（例如 16 位索引）"""
    code = "ENC001"


class PartialWriteError(ExportError):
    """写入器打开后失败，目标文件可能已被部分写入"""
    code = "IO002"


class FormatError(ExportError):
    """解码时文件结构不合法（截断、数量不匹配等）"""
    code = "FMT001"
