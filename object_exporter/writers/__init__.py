# File: writers/__init__.py
# Purpose: Writers 模块初始化

"""
ObjectExporter Writers Module
每种场景对象一个编码器，以及清单 / 审计日志写入器
"""

from .static_mesh_writer import StaticMeshExporter, export_static_mesh
from .skeletal_mesh_writer import SkeletalMeshExporter, export_skeletal_mesh
from .skeleton_writer import SkeletonExporter, export_skeleton
from .animation_writer import AnimationExporter, export_animation
from .camera_writer import CameraExporter, export_camera

__all__ = [
    'StaticMeshExporter',
    'SkeletalMeshExporter',
    'SkeletonExporter',
    'AnimationExporter',
    'CameraExporter',
    'export_static_mesh',
    'export_skeletal_mesh',
    'export_skeleton',
    'export_animation',
    'export_camera',
]
