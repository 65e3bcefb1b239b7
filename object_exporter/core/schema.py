# File: core/schema.py
# Purpose: ObjectExporter 导出数据结构定义（dataclass）
# Notes:
# - 所有导出文件的核心数据结构
# - StaticMesh / SkeletalMesh / Skeleton / Animation / Camera / Map
# - 所有记录都是临时对象：从宿主只读视图构建，序列化一次后丢弃
# - 向量/四元数使用 mathutils 类型，只在二进制边界展开为 float

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from mathutils import Quaternion, Vector


# ==================== 枚举类型 ====================

class SceneObjectKind(Enum):
    """可导出资源类型"""
    STATIC_MESH = "StaticMesh"
    SKELETAL_MESH = "SkeletalMesh"
    SKELETON = "Skeleton"
    ANIMATION_CLIP = "AnimationClip"
    CAMERA = "Camera"
    DIRECTIONAL_LIGHT = "DirectionalLight"


class ExportFormat(Enum):
    """由目标文件后缀决定的编码方式"""
    BINARY = "binary"
    JSON = "json"


# ==================== 资源引用 ====================

@dataclass(frozen=True)
class ResourceHandle:
    """宿主提供的资源句柄（完整限定名 + 原生对象）"""
    kind: SceneObjectKind
    identifier: str                     # 例如 "/Game/Props/SM_Chair.SM_Chair"
    native: Any = field(default=None, compare=False, hash=False)


@dataclass(frozen=True)
class SceneObjectRef:
    """已解析的资源引用：(类型, 名称, 输出路径)"""
    kind: SceneObjectKind
    name: str                           # 去掉容器路径前缀后的名称，作为文件名
    path: str                           # 确定性的输出路径
    handle: Optional[ResourceHandle] = field(default=None, compare=False, hash=False)


@dataclass
class Transform:
    """组件世界变换"""
    location: Vector = field(default_factory=lambda: Vector((0.0, 0.0, 0.0)))
    rotation: Quaternion = field(default_factory=lambda: Quaternion((1.0, 0.0, 0.0, 0.0)))
    scale: Vector = field(default_factory=lambda: Vector((1.0, 1.0, 1.0)))


# ==================== Geometry 数据结构 ====================

@dataclass
class Vertex:
    """顶点（位置 + 法线 + UV0）"""
    position: Vector
    normal: Vector
    uv: Tuple[float, float] = (0.0, 0.0)


@dataclass
class GeometryRecord:
    """
    .stm / .skm 文件数据结构（只包含 LOD 0）
    """
    name: str = ""
    vertices: List[Vertex] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)    # 16 位索引
    skeleton_name: str = ""                             # 仅骨骼网格的 JSON 文档使用

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def index_count(self) -> int:
        return len(self.indices)


# ==================== Skeleton 数据结构 ====================

@dataclass
class BoneInfo:
    """骨骼层级信息"""
    name: str
    parent_index: int = -1              # -1 = 根骨骼


@dataclass
class BoneTransform:
    """骨骼绑定姿态"""
    translation: Vector = field(default_factory=lambda: Vector((0.0, 0.0, 0.0)))
    rotation: Quaternion = field(default_factory=lambda: Quaternion((1.0, 0.0, 0.0, 0.0)))
    scale: Vector = field(default_factory=lambda: Vector((1.0, 1.0, 1.0)))


@dataclass
class SkeletonRecord:
    """
    .skt 文件数据结构
    bone_infos 与 bone_poses 按索引对齐，但二进制中两者数量独立存储
    """
    name: str = ""
    bone_infos: List[BoneInfo] = field(default_factory=list)
    bone_poses: List[BoneTransform] = field(default_factory=list)

    def is_aligned(self) -> bool:
        return len(self.bone_infos) == len(self.bone_poses)


# ==================== Animation 数据结构 ====================

@dataclass
class AnimationTrack:
    """单根骨骼的原始关键帧轨道（三个通道长度可以不同）"""
    scale_keys: List[Vector] = field(default_factory=list)
    rotation_keys: List[Quaternion] = field(default_factory=list)
    position_keys: List[Vector] = field(default_factory=list)


@dataclass
class AnimationRecord:
    """
    .anm 文件数据结构（按骨架骨骼顺序排列的轨道）
    """
    name: str = ""
    tracks: List[AnimationTrack] = field(default_factory=list)

    @property
    def track_count(self) -> int:
        return len(self.tracks)


# ==================== Map 数据结构 ====================

@dataclass
class CameraRecord:
    """相机"""
    location: Vector
    look_at_target: Vector
    fov: float = 90.0
    aspect_ratio: float = 1.777778
    rotation: Quaternion = field(default_factory=lambda: Quaternion((1.0, 0.0, 0.0, 0.0)))


@dataclass
class LightRecord:
    """平行光"""
    linear_color: Tuple[float, float, float, float]
    direction: Vector
    intensity: float = 1.0


@dataclass
class PlacementRecord:
    """资源摆放（旋转 + 位置 + 资源名）"""
    rotation: Quaternion
    location: Vector
    resource_name: str


@dataclass
class MapRecord:
    """
    .map 文件数据结构：四个独立计数的分段
    """
    version: Optional[int] = None
    cameras: List[CameraRecord] = field(default_factory=list)
    lights: List[LightRecord] = field(default_factory=list)
    static_placements: List[PlacementRecord] = field(default_factory=list)
    skeletal_placements: List[PlacementRecord] = field(default_factory=list)


# ==================== Manifest / Audit ====================

@dataclass
class ManifestEntry:
    """清单条目"""
    file: str                           # 相对导出根目录的路径
    file_type: str                      # static_mesh / skeletal_mesh / skeleton / animation / map
    dependencies: List[str] = field(default_factory=list)
    hash: str = ""


@dataclass
class Manifest:
    """manifest.json 数据结构"""
    version: int = 1
    entries: List[ManifestEntry] = field(default_factory=list)


@dataclass
class AuditEntry:
    """审计日志条目"""
    code: str
    message: str
    severity: str                       # ERROR / WARNING / INFO
    object_name: Optional[str] = None
    timestamp: str = ""
