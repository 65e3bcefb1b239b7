# -*- coding: utf-8 -*-
"""
ObjectExporter - Animation Codec

- One track per skeleton bone, in bone order
- Raw passthrough of the source keyframes: no sampling, no interpolation
- Scale / rotation / position key counts are independent per track

Layout (little-endian):
- [version (i32)]                    only when version stamping is enabled
- track_count (i32)
- per track:
    - scale_key_count (i32),    scale_key_count * (3 * f32)
    - rotation_key_count (i32), rotation_key_count * (x, y, z, w f32)
    - position_key_count (i32), position_key_count * (3 * f32)
"""

from __future__ import annotations
from typing import Any, Dict

from mathutils import Quaternion, Vector

from ..config.constants import BINARY_FORMAT_VERSION
from .errors import FormatError, MissingResourceError
from .host import AnimationView, HostScene
from .io.binary_reader import BinaryReader
from .io.binary_writer import BinaryFileWriter, BinaryWriter, check_f32
from .io.json_writer import quat_to_json, vector_to_json
from .schema import AnimationRecord, AnimationTrack, ResourceHandle


# ====== Build ======

def animation_from_view(view: AnimationView, name: str = "") -> AnimationRecord:
    """
    Reorder the source tracks into skeleton bone order. Bones the clip does not
    animate get an empty track.
    """
    if view.bone_count < 0:
        raise MissingResourceError(f"invalid bone count {view.bone_count}", name)
    for bone_index in view.bone_tracks:
        if bone_index < 0 or bone_index >= view.bone_count:
            raise MissingResourceError(
                f"track bound to bone {bone_index}, skeleton has {view.bone_count} bones", name
            )

    record = AnimationRecord(name=name)
    for bone_index in range(view.bone_count):
        raw = view.bone_tracks.get(bone_index)
        if raw is None:
            record.tracks.append(AnimationTrack())
            continue
        for label, keys in (("scale", raw.scale_keys), ("rotation", raw.rotation_keys),
                            ("position", raw.position_keys)):
            for key in keys:
                check_f32(key, f"bone {bone_index} {label} key", name)
        record.tracks.append(AnimationTrack(
            scale_keys=[Vector(k) for k in raw.scale_keys],
            rotation_keys=[Quaternion(k) for k in raw.rotation_keys],
            position_keys=[Vector(k) for k in raw.position_keys],
        ))
    return record


def build_animation_record(host: HostScene, resource: ResourceHandle, name: str = "") -> AnimationRecord:
    if resource is None:
        raise MissingResourceError("animation resource is None", name)
    view = host.get_animation_view(resource)
    if view is None:
        raise MissingResourceError("animation has no raw track data", name)
    return animation_from_view(view, name)


# ====== Binary ======

def encode_animation(binw: BinaryWriter, record: AnimationRecord, version_stamp: bool = False) -> None:
    if version_stamp:
        binw.write_i32(BINARY_FORMAT_VERSION)

    binw.write_i32(record.track_count)
    for track in record.tracks:
        binw.write_i32(len(track.scale_keys))
        for key in track.scale_keys:
            binw.write_vec3(key)

        binw.write_i32(len(track.rotation_keys))
        for key in track.rotation_keys:
            binw.write_quat(key)

        binw.write_i32(len(track.position_keys))
        for key in track.position_keys:
            binw.write_vec3(key)


def decode_animation(reader: BinaryReader, version_stamp: bool = False) -> AnimationRecord:
    if version_stamp:
        version = reader.read_i32()
        if version != BINARY_FORMAT_VERSION:
            raise FormatError(f"unsupported animation version {version}")

    record = AnimationRecord()
    for _ in range(reader.read_count()):
        track = AnimationTrack()
        track.scale_keys = [reader.read_vec3() for _ in range(reader.read_count())]
        track.rotation_keys = [reader.read_quat() for _ in range(reader.read_count())]
        track.position_keys = [reader.read_vec3() for _ in range(reader.read_count())]
        record.tracks.append(track)
    return record


def write_animation_file(path: str, record: AnimationRecord, version_stamp: bool = False) -> int:
    with BinaryFileWriter(path) as binw:
        encode_animation(binw, record, version_stamp)
        return binw.bytes_written


def read_animation_file(path: str, version_stamp: bool = False) -> AnimationRecord:
    reader = BinaryReader.from_file(path)
    record = decode_animation(reader, version_stamp)
    if not reader.at_end():
        raise FormatError(f"{reader.remaining} trailing bytes after animation record")
    return record


# ====== Structured document ======

def animation_to_document(record: AnimationRecord) -> Dict[str, Any]:
    return {
        "AnimationName": record.name,
        "TrackCount": record.track_count,
        "Tracks": [
            {
                "ScaleKeys": [vector_to_json(k) for k in track.scale_keys],
                "RotationKeys": [quat_to_json(k) for k in track.rotation_keys],
                "PositionKeys": [vector_to_json(k) for k in track.position_keys],
            }
            for track in record.tracks
        ],
    }
