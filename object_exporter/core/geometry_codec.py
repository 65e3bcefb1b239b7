# -*- coding: utf-8 -*-
"""
ObjectExporter - Geometry Codec (shared by static and skeletal meshes)

- Builds a GeometryRecord from LOD 0 of a mesh; lower LODs are discarded
- Normal = tangent_z.xyz * tangent_z.w (handedness sign applied)
- UV channel 0 only
- Indices are narrowed to uint16; any index >= 65536 rejects the mesh

Layout (little-endian):
- [version (i32), lod_count (i32)]   only when version stamping is enabled
- vertex_count (i32)
- vertex_count * { position (3 * f32), normal (3 * f32), uv (2 * f32) }
- index_count (i32)
- index_count * index (u16)
"""

from __future__ import annotations
from typing import Any, Dict

from mathutils import Vector

from ..config.constants import (
    BINARY_FORMAT_VERSION,
    EXPORTED_LOD_COUNT,
    EXPORTED_LOD_INDEX,
    EXPORTED_UV_CHANNEL,
    MAX_INDEX_VALUE,
)
from .errors import EncodingOverflowError, FormatError, MissingResourceError
from .formats.tangent_basis import reconstruct_normal
from .host import GeometryView, HostScene
from .io.binary_reader import BinaryReader
from .io.binary_writer import BinaryFileWriter, BinaryWriter, check_f32
from .io.json_writer import vector_to_json
from .schema import GeometryRecord, ResourceHandle, Vertex


# ====== Build ======

def geometry_from_view(view: GeometryView, name: str = "") -> GeometryRecord:
    """
    Convert one LOD view into a GeometryRecord. All range checks happen here so
    that an invalid mesh is rejected before any destination file is opened.
    """
    num_vertices = len(view.positions)
    if len(view.tangent_z) != num_vertices:
        raise MissingResourceError(
            f"tangent buffer has {len(view.tangent_z)} entries, expected {num_vertices}", name
        )

    uvs = None
    if len(view.uv_channels) > EXPORTED_UV_CHANNEL:
        uvs = view.uv_channels[EXPORTED_UV_CHANNEL]
        if len(uvs) != num_vertices:
            raise MissingResourceError(
                f"UV channel {EXPORTED_UV_CHANNEL} has {len(uvs)} entries, expected {num_vertices}", name
            )

    record = GeometryRecord(name=name)
    for i in range(num_vertices):
        p = view.positions[i]
        uv = uvs[i] if uvs is not None else (0.0, 0.0)
        check_f32(p[:3], f"vertex {i} position", name)
        check_f32(view.tangent_z[i][:4], f"vertex {i} tangent", name)
        check_f32(uv[:2], f"vertex {i} uv", name)
        record.vertices.append(Vertex(
            position=Vector((float(p[0]), float(p[1]), float(p[2]))),
            normal=reconstruct_normal(view.tangent_z[i]),
            uv=(float(uv[0]), float(uv[1])),
        ))

    for index in view.indices:
        index = int(index)
        if index > MAX_INDEX_VALUE:
            raise EncodingOverflowError(
                f"index {index} exceeds 16-bit range (max {MAX_INDEX_VALUE})", name
            )
        if index < 0 or index >= num_vertices:
            raise MissingResourceError(
                f"index {index} references a vertex outside 0..{num_vertices - 1}", name
            )
        record.indices.append(index)

    return record


def build_geometry_record(host: HostScene, resource: ResourceHandle, name: str = "") -> GeometryRecord:
    """
    Read the highest-detail LOD of a mesh resource. Additional LODs are never read.
    """
    if resource is None:
        raise MissingResourceError("mesh resource is None", name)
    lod_count = host.get_lod_count(resource)
    if lod_count <= EXPORTED_LOD_INDEX:
        raise MissingResourceError(f"mesh has no render data (lod_count={lod_count})", name)

    view = host.get_geometry_view(resource, EXPORTED_LOD_INDEX)
    if view is None:
        raise MissingResourceError(f"LOD {EXPORTED_LOD_INDEX} is not CPU accessible", name)
    return geometry_from_view(view, name)


# ====== Binary ======

def encode_geometry(binw: BinaryWriter, record: GeometryRecord, version_stamp: bool = False) -> None:
    if version_stamp:
        binw.write_i32(BINARY_FORMAT_VERSION)
        binw.write_i32(EXPORTED_LOD_COUNT)

    binw.write_i32(record.vertex_count)
    for v in record.vertices:
        binw.write_vec3(v.position)
        binw.write_vec3(v.normal)
        binw.write_vec2(v.uv)

    binw.write_i32(record.index_count)
    binw.write_u16_array(record.indices)


def decode_geometry(reader: BinaryReader, version_stamp: bool = False) -> GeometryRecord:
    if version_stamp:
        version = reader.read_i32()
        if version != BINARY_FORMAT_VERSION:
            raise FormatError(f"unsupported geometry version {version}")
        lod_count = reader.read_i32()
        if lod_count != EXPORTED_LOD_COUNT:
            raise FormatError(f"expected {EXPORTED_LOD_COUNT} LOD, found {lod_count}")

    record = GeometryRecord()
    for _ in range(reader.read_count()):
        position = reader.read_vec3()
        normal = reader.read_vec3()
        uv = reader.read_vec2()
        record.vertices.append(Vertex(position=position, normal=normal, uv=uv))

    index_count = reader.read_count()
    record.indices = reader.read_u16_array(index_count)
    return record


def write_geometry_file(path: str, record: GeometryRecord, version_stamp: bool = False) -> int:
    with BinaryFileWriter(path) as binw:
        encode_geometry(binw, record, version_stamp)
        return binw.bytes_written


def read_geometry_file(path: str, version_stamp: bool = False) -> GeometryRecord:
    reader = BinaryReader.from_file(path)
    record = decode_geometry(reader, version_stamp)
    if not reader.at_end():
        raise FormatError(f"{reader.remaining} trailing bytes after geometry record")
    return record


# ====== Structured document ======

def geometry_to_document(record: GeometryRecord) -> Dict[str, Any]:
    """
    JSON body for a mesh. Only LOD 0 is listed.
    """
    return {
        "MeshName": record.name,
        "VertexCount": record.vertex_count,
        "IndexCount": record.index_count,
        "VertexFormat": ["Position"],
        "LODs": [
            {
                "LOD": EXPORTED_LOD_INDEX,
                "Vertices": [vector_to_json(v.position) for v in record.vertices],
                "Indices": [{"index": i} for i in record.indices],
            }
        ],
    }
