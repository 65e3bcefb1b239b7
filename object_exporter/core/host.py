# -*- coding: utf-8 -*-
"""
ObjectExporter - Host scene interface

The exporter never touches the host engine directly. Scene enumeration,
component transforms and native resource buffers are reached through a
HostScene implementation; tests substitute an in-memory snapshot.

View objects are read-only snapshots of native buffers. Only the fields the
codecs consume are modelled.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

from mathutils import Quaternion, Vector

from .schema import BoneTransform, ResourceHandle, SceneObjectKind, Transform


# ====== Read-only views ======

@dataclass
class GeometryView:
    """
    One level of detail of a mesh.
    - positions:   per-vertex position
    - tangent_z:   per-vertex (x, y, z, handedness sign)
    - uv_channels: list of UV channels, each a per-vertex (u, v) list
    - indices:     triangle list indices, in the host's native width
    """
    positions: Sequence[Vector] = field(default_factory=list)
    tangent_z: Sequence[Tuple[float, float, float, float]] = field(default_factory=list)
    uv_channels: Sequence[Sequence[Tuple[float, float]]] = field(default_factory=list)
    indices: Sequence[int] = field(default_factory=list)


@dataclass
class SkeletonView:
    bone_names: Sequence[str] = field(default_factory=list)
    parent_indices: Sequence[int] = field(default_factory=list)
    bind_poses: Sequence[BoneTransform] = field(default_factory=list)


@dataclass
class RawTrackView:
    scale_keys: Sequence[Vector] = field(default_factory=list)
    rotation_keys: Sequence[Quaternion] = field(default_factory=list)
    position_keys: Sequence[Vector] = field(default_factory=list)


@dataclass
class AnimationView:
    """
    bone_count:  number of bones of the skeleton the clip targets
    bone_tracks: skeleton bone index -> raw track
    """
    bone_count: int = 0
    bone_tracks: Dict[int, RawTrackView] = field(default_factory=dict)


@dataclass
class CameraView:
    fov: float = 90.0
    aspect_ratio: float = 1.777778


@dataclass
class LightView:
    linear_color: Tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    intensity: float = 1.0


# ====== Host capability ======

class HostScene(ABC):
    """
    Capabilities the exporter needs from the host engine.
    """

    # ---- scene graph ----
    @abstractmethod
    def list_actors_of_kind(self, kind: SceneObjectKind) -> Sequence[Any]:
        """Actors of one kind, in the host's enumeration order."""

    @abstractmethod
    def get_transform(self, actor: Any) -> Transform:
        """World transform of the actor's root component."""

    @abstractmethod
    def get_resource_ref(self, actor: Any) -> Optional[ResourceHandle]:
        """Resource referenced by the actor's mesh component; None if the component is absent."""

    def get_active_animation_ref(self, actor: Any) -> Optional[ResourceHandle]:
        return None

    @abstractmethod
    def get_camera_view(self, actor: Any) -> CameraView:
        ...

    @abstractmethod
    def get_light_view(self, actor: Any) -> LightView:
        ...

    # ---- resources ----
    @abstractmethod
    def get_lod_count(self, resource: ResourceHandle) -> int:
        ...

    @abstractmethod
    def get_geometry_view(self, resource: ResourceHandle, lod: int) -> Optional[GeometryView]:
        ...

    @abstractmethod
    def get_skeleton_ref(self, skeletal_mesh: ResourceHandle) -> Optional[ResourceHandle]:
        ...

    @abstractmethod
    def get_skeleton_view(self, skeleton: ResourceHandle) -> Optional[SkeletonView]:
        ...

    @abstractmethod
    def get_animation_view(self, animation: ResourceHandle) -> Optional[AnimationView]:
        ...

    def export_texture_assets(self, resource: ResourceHandle, directory: str) -> bool:
        """
        Opaque delegate to the host's generic asset exporter for the textures a
        mesh uses. Hosts without texture support report success with nothing written.
        """
        return True

