# -*- coding: utf-8 -*-
"""
ObjectExporter 常量定义
"""

# 文件版本（JSON FileVersion / 可选的二进制版本戳）
FILE_VERSION = 1
BINARY_FORMAT_VERSION = 2  # 2: 法线带切线符号 + LOD 数量字段

# 索引格式：只支持 16 位索引
MAX_INDEX_VALUE = 0xFFFF

# 只导出最高精度 LOD
EXPORTED_LOD_INDEX = 0
EXPORTED_LOD_COUNT = 1

# UV 通道
EXPORTED_UV_CHANNEL = 0

# 文件扩展名
EXT_JSON = ".json"
EXT_STATIC_MESH = ".stm"
EXT_SKELETAL_MESH = ".skm"
EXT_SKELETON = ".skt"
EXT_ANIMATION = ".anm"
EXT_MAP = ".map"
EXT_MANIFEST = "manifest.json"
EXT_AUDIT = "audit.log"

# 固定子目录（相对于 .map 文件所在目录）
STATIC_MESH_SUBDIR = "StaticMesh"
SKELETAL_MESH_SUBDIR = "SkeletalMesh"
SKELETON_SUBDIR = "SkeletalMesh/Skeleton"
ANIMATION_SUBDIR = "SkeletalMesh/AnimSequence"
TEXTURES_SUBDIR = "Textures"

# 默认值
DEFAULT_LOG_CATEGORY = "ObjectExporter"
DEFAULT_LOOK_AT_DISTANCE = 1.0
