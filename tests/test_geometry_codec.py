import json

import pytest
from mathutils import Vector

from conftest import make_geometry, triangle_geometry
from object_exporter.core.errors import EncodingOverflowError, MissingResourceError
from object_exporter.core.formats.tangent_basis import handedness_sign, reconstruct_normal
from object_exporter.core.geometry_codec import (
    build_geometry_record,
    geometry_from_view,
    geometry_to_document,
    read_geometry_file,
    write_geometry_file,
)
from object_exporter.writers.static_mesh_writer import export_static_mesh


def test_triangle_exported_to_stm_decodes_in_order(scene, settings, tmp_path):
    mesh = scene.add_mesh("/Game/Props/SM_Tri.SM_Tri", triangle_geometry())
    path = str(tmp_path / "mesh.stm")

    assert export_static_mesh(scene, mesh, path, settings)

    record = read_geometry_file(path)
    assert record.vertex_count == 3
    assert [tuple(v.position) for v in record.vertices] == [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
    assert record.index_count == 3
    assert record.indices == [0, 1, 2]
    assert record.vertices[1].uv == (1.0, 0.0)


def test_default_layout_size(scene, settings, tmp_path):
    mesh = scene.add_mesh("SM_Tri", triangle_geometry())
    path = tmp_path / "mesh.stm"
    assert export_static_mesh(scene, mesh, str(path), settings)
    # vertex count + 3 * (pos + normal + uv) + index count + 3 * u16
    assert path.stat().st_size == 4 + 3 * 32 + 4 + 3 * 2


def test_version_stamp_adds_version_and_lod_count(scene, settings, tmp_path):
    settings.write_version_stamp = True
    mesh = scene.add_mesh("SM_Tri", triangle_geometry())
    path = str(tmp_path / "mesh.stm")
    assert export_static_mesh(scene, mesh, path, settings)

    raw = (tmp_path / "mesh.stm").read_bytes()
    assert raw[:8] == b"\x02\x00\x00\x00\x01\x00\x00\x00"
    assert read_geometry_file(path, version_stamp=True).indices == [0, 1, 2]


def test_large_mesh_round_trip(tmp_path):
    count = 65535
    positions = [(float(i), float(i % 7), -float(i % 13)) for i in range(count)]
    indices = [i for i in range(count - 3)] + [count - 1, 0, count - 2]
    record = geometry_from_view(make_geometry(positions, indices), "SM_Big")

    path = str(tmp_path / "big.stm")
    write_geometry_file(path, record)
    decoded = read_geometry_file(path)

    assert decoded.vertex_count == count
    assert decoded.indices == indices
    assert tuple(decoded.vertices[-1].position) == positions[-1]


def test_index_above_16_bits_fails_before_any_file_is_created(scene, settings, tmp_path):
    positions = [(0.0, 0.0, 0.0)] * 3
    mesh = scene.add_mesh("SM_Huge", make_geometry(positions, [0, 1, 65536]))
    path = tmp_path / "huge.stm"

    assert not export_static_mesh(scene, mesh, str(path), settings)
    assert not path.exists()

    with pytest.raises(EncodingOverflowError):
        build_geometry_record(scene, mesh, "SM_Huge")


def test_uv_outside_float_range_fails_before_any_file_is_created(scene, settings, tmp_path):
    view = triangle_geometry()
    view.uv_channels[0][1] = (1e39, 0.0)
    mesh = scene.add_mesh("SM_FarUV", view)
    path = tmp_path / "far_uv.stm"

    assert not export_static_mesh(scene, mesh, str(path), settings)
    assert not path.exists()

    with pytest.raises(EncodingOverflowError):
        build_geometry_record(scene, mesh, "SM_FarUV")


def test_non_finite_position_is_rejected():
    view = make_geometry([(0.0, 0.0, 0.0), (float("inf"), 0.0, 0.0), (0.0, 1.0, 0.0)], [0, 1, 2])
    with pytest.raises(EncodingOverflowError):
        geometry_from_view(view, "SM_Inf")


def test_index_outside_vertex_range_is_rejected():
    with pytest.raises(MissingResourceError):
        geometry_from_view(make_geometry([(0.0, 0.0, 0.0)], [0, 0, 1]))


def test_normal_uses_tangent_handedness_sign():
    view = make_geometry(
        [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0)],
        [],
        normals=[(0.0, 0.0, 1.0, 1.0), (0.0, 0.0, 1.0, -1.0)],
    )
    record = geometry_from_view(view)
    assert tuple(record.vertices[0].normal) == (0.0, 0.0, 1.0)
    assert tuple(record.vertices[1].normal) == (0.0, 0.0, -1.0)


def test_handedness_sign_is_binary():
    assert handedness_sign(0.25) == 1.0
    assert handedness_sign(0.0) == 1.0
    assert handedness_sign(-0.01) == -1.0
    assert reconstruct_normal((1.0, 0.0, 0.0, -1.0)) == Vector((-1.0, 0.0, 0.0))


def test_only_lod_zero_is_read(scene):
    lod1 = make_geometry([(9.0, 9.0, 9.0)], [0, 0, 0])
    mesh = scene.add_mesh("SM_Lod", triangle_geometry(), lod1)
    record = build_geometry_record(scene, mesh, "SM_Lod")
    assert record.vertex_count == 3


def test_missing_uv_channel_writes_zero_uvs():
    record = geometry_from_view(make_geometry([(1.0, 2.0, 3.0)], []))
    assert record.vertices[0].uv == (0.0, 0.0)


def test_zero_vertices_produce_empty_record(scene, settings, tmp_path):
    mesh = scene.add_mesh("SM_Empty", make_geometry([], []))
    path = str(tmp_path / "empty.stm")
    assert export_static_mesh(scene, mesh, path, settings)

    record = read_geometry_file(path)
    assert record.vertex_count == 0
    assert record.index_count == 0


def test_mesh_without_render_data_is_missing(scene):
    mesh = scene.add_mesh("SM_NoLods")
    with pytest.raises(MissingResourceError):
        build_geometry_record(scene, mesh, "SM_NoLods")


def test_json_document(scene, settings, tmp_path):
    mesh = scene.add_mesh("/Game/Props/SM_Tri.SM_Tri", triangle_geometry())
    path = tmp_path / "SM_Tri.json"
    assert export_static_mesh(scene, mesh, str(path), settings)

    doc = json.loads(path.read_text(encoding="utf-8"))
    assert doc["FileVersion"] == 1
    assert doc["MeshName"] == "SM_Tri"
    assert doc["VertexCount"] == 3
    assert doc["IndexCount"] == 3
    assert len(doc["LODs"]) == 1
    assert doc["LODs"][0]["Vertices"][1] == {"x": 1.0, "y": 0.0, "z": 0.0}
    assert doc["LODs"][0]["Indices"] == [{"index": 0}, {"index": 1}, {"index": 2}]


def test_document_matches_record():
    record = geometry_from_view(triangle_geometry(), "SM_Tri")
    doc = geometry_to_document(record)
    assert doc["VertexFormat"] == ["Position"]
    assert doc["LODs"][0]["LOD"] == 0
