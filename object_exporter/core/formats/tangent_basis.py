# -*- coding: utf-8 -*-
"""
切线空间处理

宿主的切线基（tangent basis）中法线以 4 分量存储：xyz 为方向，
w 为手性符号（+1 / -1）。重建 3 分量法线时必须乘以该符号。
早期格式版本漏乘了符号，镜像网格的法线因此被翻转。
"""

from typing import Sequence

from mathutils import Vector


def handedness_sign(w: float) -> float:
    """
    将 w 分量归一为二值符号

    参数:
        w: 切线第 4 分量

    返回:
        1.0 或 -1.0
    """
    return -1.0 if w < 0.0 else 1.0


def reconstruct_normal(tangent_z: Sequence[float]) -> Vector:
    """
    由 4 分量切线重建法线

    参数:
        tangent_z: (x, y, z, w)，w 为手性符号

    返回:
        Vector: 法线
    """
    sign = handedness_sign(float(tangent_z[3]))
    return Vector((float(tangent_z[0]), float(tangent_z[1]), float(tangent_z[2]))) * sign
