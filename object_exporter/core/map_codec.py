# -*- coding: utf-8 -*-
"""
ObjectExporter - Map Codec

Per-record encoders for the .map manifest. The map exporter writes each
section as it enumerates the scene, so sections are emitted one at a time:
count (i32) followed by the records.

Layout (little-endian):
- [version (i32)]                    only when version stamping is enabled
- camera_count (i32),  camera_count * { location (3 * f32), look_at_target (3 * f32), fov (f32), aspect_ratio (f32) }
- light_count (i32),   light_count * { linear_color (4 * f32), direction (3 * f32), intensity (f32) }
- static_count (i32),  static_count * { rotation (x, y, z, w f32), location (3 * f32), resource_name (string) }
- skeletal_count (i32), same record layout as static placements
"""

from __future__ import annotations
from typing import Any

from mathutils import Quaternion, Vector

from ..config.constants import BINARY_FORMAT_VERSION
from .errors import FormatError
from .host import HostScene
from .io.binary_reader import BinaryReader
from .io.binary_writer import BinaryWriter
from .schema import CameraRecord, LightRecord, MapRecord, PlacementRecord

# Host forward axis (X forward)
FORWARD_AXIS = (1.0, 0.0, 0.0)


# ====== Build ======

def forward_vector(rotation: Quaternion) -> Vector:
    return rotation @ Vector(FORWARD_AXIS)


def camera_from_actor(host: HostScene, actor: Any, look_at_distance: float = 1.0) -> CameraRecord:
    transform = host.get_transform(actor)
    view = host.get_camera_view(actor)
    location = Vector(transform.location)
    rotation = Quaternion(transform.rotation)
    return CameraRecord(
        location=location,
        look_at_target=location + forward_vector(rotation) * look_at_distance,
        fov=float(view.fov),
        aspect_ratio=float(view.aspect_ratio),
        rotation=rotation,
    )


def light_from_actor(host: HostScene, actor: Any) -> LightRecord:
    transform = host.get_transform(actor)
    view = host.get_light_view(actor)
    return LightRecord(
        linear_color=tuple(float(c) for c in view.linear_color),
        direction=forward_vector(Quaternion(transform.rotation)),
        intensity=float(view.intensity),
    )


# ====== Binary ======

def encode_map_header(binw: BinaryWriter, version_stamp: bool = False) -> None:
    if version_stamp:
        binw.write_i32(BINARY_FORMAT_VERSION)


def encode_camera(binw: BinaryWriter, camera: CameraRecord) -> None:
    binw.write_vec3(camera.location)
    binw.write_vec3(camera.look_at_target)
    binw.write_f32(camera.fov)
    binw.write_f32(camera.aspect_ratio)


def encode_light(binw: BinaryWriter, light: LightRecord) -> None:
    binw.write_vec4(light.linear_color)
    binw.write_vec3(light.direction)
    binw.write_f32(light.intensity)


def encode_placement(binw: BinaryWriter, placement: PlacementRecord) -> None:
    binw.write_quat(placement.rotation)
    binw.write_vec3(placement.location)
    binw.write_string(placement.resource_name)


def decode_map(reader: BinaryReader, version_stamp: bool = False) -> MapRecord:
    record = MapRecord()
    if version_stamp:
        record.version = reader.read_i32()
        if record.version != BINARY_FORMAT_VERSION:
            raise FormatError(f"unsupported map version {record.version}")

    for _ in range(reader.read_count()):
        location = reader.read_vec3()
        target = reader.read_vec3()
        fov = reader.read_f32()
        aspect = reader.read_f32()
        record.cameras.append(CameraRecord(location=location, look_at_target=target, fov=fov, aspect_ratio=aspect))

    for _ in range(reader.read_count()):
        color = reader.read_vec4()
        direction = reader.read_vec3()
        intensity = reader.read_f32()
        record.lights.append(LightRecord(linear_color=color, direction=direction, intensity=intensity))

    for placements in (record.static_placements, record.skeletal_placements):
        for _ in range(reader.read_count()):
            rotation = reader.read_quat()
            location = reader.read_vec3()
            name = reader.read_string()
            placements.append(PlacementRecord(rotation=rotation, location=location, resource_name=name))
    return record


def read_map_file(path: str, version_stamp: bool = False) -> MapRecord:
    reader = BinaryReader.from_file(path)
    record = decode_map(reader, version_stamp)
    if not reader.at_end():
        raise FormatError(f"{reader.remaining} trailing bytes after map record")
    return record
