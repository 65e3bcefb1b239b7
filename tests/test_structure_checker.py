import io

import pytest

from conftest import three_bone_skeleton, triangle_geometry
from object_exporter.core.geometry_codec import geometry_from_view, write_geometry_file
from object_exporter.core.io.binary_writer import BinaryWriter
from object_exporter.core.schema import BoneInfo, BoneTransform, SceneObjectKind, SkeletonRecord
from object_exporter.core.skeleton_codec import encode_skeleton, skeleton_from_view, write_skeleton_file
from object_exporter.map_exporter import MapExporter
from object_exporter.validators.structure_checker import (
    StructureChecker,
    check_files,
    validate_triangle_list,
)


def test_valid_geometry_file_has_no_errors(tmp_path):
    path = str(tmp_path / "SM_Tri.stm")
    write_geometry_file(path, geometry_from_view(triangle_geometry(), "SM_Tri"))

    report = StructureChecker().check_file(path)
    assert report["errors"] == []
    assert report["counts"] == {"vertices": 3, "indices": 3}


def test_truncated_file_is_reported(tmp_path):
    path = tmp_path / "SM_Tri.stm"
    write_geometry_file(str(path), geometry_from_view(triangle_geometry(), "SM_Tri"))
    path.write_bytes(path.read_bytes()[:-3])

    report = StructureChecker().check_file(str(path))
    assert len(report["errors"]) == 1
    assert "文件结构错误" in report["errors"][0]


def test_trailing_bytes_are_reported(tmp_path):
    path = tmp_path / "Hero.skt"
    write_skeleton_file(str(path), skeleton_from_view(three_bone_skeleton(), "Hero"))
    path.write_bytes(path.read_bytes() + b"\x00\x00")

    report = StructureChecker().check_file(str(path))
    assert report["errors"] == ["记录末尾多出 2 字节"]


def test_skeleton_count_mismatch_is_reported(tmp_path):
    record = SkeletonRecord(bone_infos=[BoneInfo("a"), BoneInfo("b", 0)], bone_poses=[BoneTransform()])
    stream = io.BytesIO()
    encode_skeleton(BinaryWriter(stream), record)
    path = tmp_path / "Odd.skt"
    path.write_bytes(stream.getvalue())

    report = StructureChecker().check_file(str(path))
    assert report["counts"] == {"bone_infos": 2, "bone_poses": 1}
    assert len(report["errors"]) == 1


def test_unknown_suffix(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("x")
    assert StructureChecker().check_file(str(path))["errors"]


def test_map_export_passes_structure_check(scene, settings, tmp_path):
    mesh = scene.add_mesh("SM_Tri", triangle_geometry())
    scene.add_actor("Tri", SceneObjectKind.STATIC_MESH, resource=mesh)
    scene.add_actor("Cam", SceneObjectKind.CAMERA)
    map_path = str(tmp_path / "Level.map")
    assert MapExporter(scene, settings).export_map(map_path)

    reports = check_files([map_path, str(tmp_path / "StaticMesh" / "SM_Tri.stm")])
    assert all(r["errors"] == [] for r in reports.values())
    assert reports[map_path]["counts"]["cameras"] == 1
    assert reports[map_path]["counts"]["static_placements"] == 1


def test_non_triangle_index_count_is_reported():
    record = geometry_from_view(triangle_geometry())
    record.indices = [0, 1]
    with pytest.raises(ValueError):
        validate_triangle_list(record)
