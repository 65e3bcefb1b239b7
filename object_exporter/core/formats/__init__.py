# -*- coding: utf-8 -*-
"""
格式处理模块
"""

from .tangent_basis import handedness_sign, reconstruct_normal

__all__ = [
    'handedness_sign',
    'reconstruct_normal',
]
