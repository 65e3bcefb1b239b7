# File: tests/conftest.py
# Purpose: 测试夹具：内存中的宿主场景 + 导出配置
# Notes:
# - SceneSnapshot 实现 HostScene，所有资源数据直接保存在字典中
# - 枚举顺序即添加顺序

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest
from mathutils import Quaternion, Vector

from object_exporter.config.export_settings import ExportSettings
from object_exporter.core.host import (
    AnimationView,
    CameraView,
    GeometryView,
    HostScene,
    LightView,
    RawTrackView,
    SkeletonView,
)
from object_exporter.core.schema import BoneTransform, ResourceHandle, SceneObjectKind, Transform
from object_exporter.utils.logger import Logger


@dataclass
class Actor:
    name: str
    kind: SceneObjectKind
    transform: Transform = field(default_factory=Transform)
    resource: Optional[ResourceHandle] = None
    animation: Optional[ResourceHandle] = None
    camera: Optional[CameraView] = None
    light: Optional[LightView] = None


class SceneSnapshot(HostScene):
    """内存场景"""

    def __init__(self):
        self.actors: List[Actor] = []
        self.lods: Dict[str, List[Optional[GeometryView]]] = {}
        self.skeleton_refs: Dict[str, ResourceHandle] = {}
        self.skeletons: Dict[str, SkeletonView] = {}
        self.animations: Dict[str, AnimationView] = {}
        self.texture_requests: List[str] = []
        self.texture_result = True

    # ---- scene building ----
    def add_mesh(self, identifier: str, *lods: GeometryView,
                 kind: SceneObjectKind = SceneObjectKind.STATIC_MESH) -> ResourceHandle:
        self.lods[identifier] = list(lods)
        return ResourceHandle(kind, identifier)

    def add_skeleton(self, identifier: str, view: SkeletonView) -> ResourceHandle:
        self.skeletons[identifier] = view
        return ResourceHandle(SceneObjectKind.SKELETON, identifier)

    def add_animation(self, identifier: str, view: AnimationView) -> ResourceHandle:
        self.animations[identifier] = view
        return ResourceHandle(SceneObjectKind.ANIMATION_CLIP, identifier)

    def add_skeletal_mesh(self, identifier: str, view: GeometryView,
                          skeleton: Optional[ResourceHandle] = None) -> ResourceHandle:
        handle = self.add_mesh(identifier, view, kind=SceneObjectKind.SKELETAL_MESH)
        if skeleton is not None:
            self.skeleton_refs[identifier] = skeleton
        return handle

    def add_actor(self, name: str, kind: SceneObjectKind, location=(0.0, 0.0, 0.0),
                  rotation=(1.0, 0.0, 0.0, 0.0), **kwargs) -> Actor:
        actor = Actor(name=name, kind=kind,
                      transform=Transform(location=Vector(location), rotation=Quaternion(rotation)),
                      **kwargs)
        self.actors.append(actor)
        return actor

    # ---- HostScene ----
    def list_actors_of_kind(self, kind: SceneObjectKind) -> List[Actor]:
        return [a for a in self.actors if a.kind == kind]

    def get_transform(self, actor: Actor) -> Transform:
        return actor.transform

    def get_resource_ref(self, actor: Actor) -> Optional[ResourceHandle]:
        return actor.resource

    def get_active_animation_ref(self, actor: Actor) -> Optional[ResourceHandle]:
        return actor.animation

    def get_camera_view(self, actor: Actor) -> CameraView:
        return actor.camera or CameraView()

    def get_light_view(self, actor: Actor) -> LightView:
        return actor.light or LightView()

    def get_lod_count(self, resource: ResourceHandle) -> int:
        return len(self.lods.get(resource.identifier, []))

    def get_geometry_view(self, resource: ResourceHandle, lod: int) -> Optional[GeometryView]:
        return self.lods[resource.identifier][lod]

    def get_skeleton_ref(self, skeletal_mesh: ResourceHandle) -> Optional[ResourceHandle]:
        return self.skeleton_refs.get(skeletal_mesh.identifier)

    def get_skeleton_view(self, skeleton: ResourceHandle) -> Optional[SkeletonView]:
        return self.skeletons.get(skeleton.identifier)

    def get_animation_view(self, animation: ResourceHandle) -> Optional[AnimationView]:
        return self.animations.get(animation.identifier)

    def export_texture_assets(self, resource: ResourceHandle, directory: str) -> bool:
        self.texture_requests.append(resource.identifier)
        return self.texture_result


# ---- geometry / skeleton / animation builders ----

def make_geometry(positions, indices, normals=None, uvs=None) -> GeometryView:
    normals = normals or [(0.0, 0.0, 1.0, 1.0)] * len(positions)
    return GeometryView(
        positions=[Vector(p) for p in positions],
        tangent_z=list(normals),
        uv_channels=[list(uvs)] if uvs is not None else [],
        indices=list(indices),
    )


def triangle_geometry() -> GeometryView:
    return make_geometry(
        [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)],
        [0, 1, 2],
        uvs=[(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)],
    )


def three_bone_skeleton() -> SkeletonView:
    return SkeletonView(
        bone_names=["root", "spine", "head"],
        parent_indices=[-1, 0, 1],
        bind_poses=[
            BoneTransform(translation=Vector((0.0, 0.0, 0.0))),
            BoneTransform(translation=Vector((0.0, 0.0, 1.0)),
                          rotation=Quaternion((0.7071068, 0.7071068, 0.0, 0.0))),
            BoneTransform(translation=Vector((0.0, 0.0, 0.5)), scale=Vector((2.0, 2.0, 2.0))),
        ],
    )


def walk_animation() -> AnimationView:
    return AnimationView(
        bone_count=3,
        bone_tracks={
            2: RawTrackView(
                scale_keys=[Vector((1.0, 1.0, 1.0))],
                rotation_keys=[Quaternion((1.0, 0.0, 0.0, 0.0)), Quaternion((0.0, 0.0, 0.0, 1.0))],
                position_keys=[Vector((0.0, 0.0, 0.5)), Vector((0.0, 0.0, 0.75)), Vector((0.0, 0.0, 1.0))],
            ),
            0: RawTrackView(
                position_keys=[Vector((1.0, 2.0, 3.0))],
            ),
        },
    )


@pytest.fixture
def scene() -> SceneSnapshot:
    return SceneSnapshot()


@pytest.fixture
def settings() -> ExportSettings:
    settings = ExportSettings()
    settings.verbose = False
    return settings


@pytest.fixture
def logger(settings) -> Logger:
    return Logger.from_settings(settings)
