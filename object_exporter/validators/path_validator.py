# 相对路径: object_exporter/validators/path_validator.py
# 功能: 导出目标路径校验，在任何 I/O 之前执行
# 规则:
#   - 路径必须是非空字符串，且包含文件名
#   - 父目录必须存在且可写
#   - 扩展名必须在允许列表中（如果指定）

import os
from typing import Iterable, Optional

from ..core.errors import InvalidDestinationError


def validate_output_path(path: str, allowed_exts: Optional[Iterable[str]] = None) -> bool:
    """
    校验导出文件路径是否合法：
    - 非空字符串，文件名非空
    - 父目录存在且可写
    - 扩展名符合要求（如果指定）

    失败时抛出 InvalidDestinationError
    """
    if not path or not isinstance(path, str):
        raise InvalidDestinationError("输出路径无效：必须是非空字符串")

    filename = os.path.basename(path)
    stem, ext = os.path.splitext(filename)
    if not stem:
        raise InvalidDestinationError(f"输出路径缺少文件名: {path}")

    parent = os.path.dirname(os.path.abspath(path))
    if not os.path.isdir(parent):
        raise InvalidDestinationError(f"输出目录不存在: {parent}")

    if not os.access(parent, os.W_OK):
        raise InvalidDestinationError(f"输出目录不可写: {parent}")

    if allowed_exts is not None:
        allowed = [e.lower() for e in allowed_exts]
        if ext.lower() not in allowed:
            raise InvalidDestinationError(
                f"输出文件扩展名必须为 {' / '.join(allowed)}: {path}"
            )

    return True


def is_valid_output_path(path: str, allowed_exts: Optional[Iterable[str]] = None) -> bool:
    """validate_output_path 的布尔版本"""
    try:
        return validate_output_path(path, allowed_exts)
    except InvalidDestinationError:
        return False
