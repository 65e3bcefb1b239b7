# -*- coding: utf-8 -*-
# File: core/__init__.py
# Purpose: Core 模块初始化

"""
ObjectExporter Core Module
包含核心数据结构、宿主接口、编解码器
"""

__all__ = [
    'schema',
    'errors',
    'host',
    'geometry_codec',
    'skeleton_codec',
    'animation_codec',
    'map_codec',
]
