# -*- coding: utf-8 -*-
"""
ObjectExporter - Skeleton Codec

- Bone hierarchy as two parallel arrays: (name, parent index) and bind pose
- The two counts are stored independently; decoders must not assume equality

Layout (little-endian):
- [version (i32)]                    only when version stamping is enabled
- bone_info_count (i32)
- bone_info_count * { name (string), parent_index (i32, -1 = root) }
- bone_pose_count (i32)
- bone_pose_count * { translation (3 * f32), rotation (x, y, z, w f32), scale (3 * f32) }
"""

from __future__ import annotations
from typing import Any, Dict

from mathutils import Quaternion, Vector

from ..config.constants import BINARY_FORMAT_VERSION
from .errors import FormatError, MissingResourceError
from .host import HostScene, SkeletonView
from .io.binary_reader import BinaryReader
from .io.binary_writer import BinaryFileWriter, BinaryWriter, check_f32
from .io.json_writer import quat_to_json, vector_to_json
from .schema import BoneInfo, BoneTransform, ResourceHandle, SkeletonRecord


# ====== Build ======

def skeleton_from_view(view: SkeletonView, name: str = "") -> SkeletonRecord:
    bone_count = len(view.bone_names)
    if len(view.parent_indices) != bone_count:
        raise MissingResourceError(
            f"{len(view.parent_indices)} parent indices for {bone_count} bones", name
        )
    if len(view.bind_poses) != bone_count:
        raise MissingResourceError(
            f"{len(view.bind_poses)} bind poses for {bone_count} bones", name
        )

    record = SkeletonRecord(name=name)
    for bone_name, parent in zip(view.bone_names, view.parent_indices):
        parent = int(parent)
        if parent < -1 or parent >= bone_count:
            raise MissingResourceError(f"bone '{bone_name}' has invalid parent index {parent}", name)
        record.bone_infos.append(BoneInfo(name=bone_name, parent_index=parent))

    for i, pose in enumerate(view.bind_poses):
        check_f32(pose.translation, f"bone {i} translation", name)
        check_f32(pose.rotation, f"bone {i} rotation", name)
        check_f32(pose.scale, f"bone {i} scale", name)
        record.bone_poses.append(BoneTransform(
            translation=Vector(pose.translation),
            rotation=Quaternion(pose.rotation),
            scale=Vector(pose.scale),
        ))
    return record


def build_skeleton_record(host: HostScene, resource: ResourceHandle, name: str = "") -> SkeletonRecord:
    if resource is None:
        raise MissingResourceError("skeleton resource is None", name)
    view = host.get_skeleton_view(resource)
    if view is None:
        raise MissingResourceError("skeleton has no reference skeleton data", name)
    return skeleton_from_view(view, name)


# ====== Binary ======

def encode_skeleton(binw: BinaryWriter, record: SkeletonRecord, version_stamp: bool = False) -> None:
    if version_stamp:
        binw.write_i32(BINARY_FORMAT_VERSION)

    binw.write_i32(len(record.bone_infos))
    for info in record.bone_infos:
        binw.write_string(info.name)
        binw.write_i32(info.parent_index)

    binw.write_i32(len(record.bone_poses))
    for pose in record.bone_poses:
        binw.write_transform(pose.translation, pose.rotation, pose.scale)


def decode_skeleton(reader: BinaryReader, version_stamp: bool = False) -> SkeletonRecord:
    """
    Decode both arrays as stored. Count alignment is reported by
    SkeletonRecord.is_aligned(), not enforced here.
    """
    if version_stamp:
        version = reader.read_i32()
        if version != BINARY_FORMAT_VERSION:
            raise FormatError(f"unsupported skeleton version {version}")

    record = SkeletonRecord()
    for _ in range(reader.read_count()):
        bone_name = reader.read_string()
        parent = reader.read_i32()
        record.bone_infos.append(BoneInfo(name=bone_name, parent_index=parent))

    for _ in range(reader.read_count()):
        translation = reader.read_vec3()
        rotation = reader.read_quat()
        scale = reader.read_vec3()
        record.bone_poses.append(BoneTransform(translation=translation, rotation=rotation, scale=scale))
    return record


def write_skeleton_file(path: str, record: SkeletonRecord, version_stamp: bool = False) -> int:
    with BinaryFileWriter(path) as binw:
        encode_skeleton(binw, record, version_stamp)
        return binw.bytes_written


def read_skeleton_file(path: str, version_stamp: bool = False) -> SkeletonRecord:
    reader = BinaryReader.from_file(path)
    record = decode_skeleton(reader, version_stamp)
    if not reader.at_end():
        raise FormatError(f"{reader.remaining} trailing bytes after skeleton record")
    return record


# ====== Structured document ======

def skeleton_to_document(record: SkeletonRecord) -> Dict[str, Any]:
    bones = []
    for info, pose in zip(record.bone_infos, record.bone_poses):
        bones.append({
            "Name": info.name,
            "ParentIndex": info.parent_index,
            "Translation": vector_to_json(pose.translation),
            "Rotation": quat_to_json(pose.rotation),
            "Scale": vector_to_json(pose.scale),
        })
    return {
        "SkeletonName": record.name,
        "BoneCount": len(record.bone_infos),
        "Bones": bones,
    }
