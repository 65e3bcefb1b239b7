import json
import math

import pytest
from mathutils import Quaternion, Vector

from conftest import three_bone_skeleton, triangle_geometry, walk_animation
from object_exporter.core.host import CameraView
from object_exporter.core.schema import SceneObjectKind
from object_exporter.writers import (
    export_animation,
    export_camera,
    export_skeletal_mesh,
    export_skeleton,
    export_static_mesh,
)
from object_exporter.writers.audit_writer import AuditLogger, ErrorCode
from object_exporter.utils.logger import Logger


def all_exports(scene):
    mesh = scene.add_mesh("SM_Tri", triangle_geometry())
    skeleton = scene.add_skeleton("SK_Hero", three_bone_skeleton())
    skeletal = scene.add_skeletal_mesh("SKM_Hero", triangle_geometry(), skeleton)
    clip = scene.add_animation("Walk", walk_animation())
    camera = scene.add_actor("Cam", SceneObjectKind.CAMERA, camera=CameraView())
    return [
        (export_static_mesh, mesh, ".stm"),
        (export_skeletal_mesh, skeletal, ".skm"),
        (export_skeleton, skeleton, ".skt"),
        (export_animation, clip, ".anm"),
        (export_camera, camera, ".json"),
    ]


def test_empty_path_fails_for_every_encoder(scene, settings, tmp_path):
    for export, source, _ in all_exports(scene):
        assert not export(scene, source, "", settings)
    assert list(tmp_path.iterdir()) == []


def test_missing_parent_directory_fails(scene, settings, tmp_path):
    for export, source, suffix in all_exports(scene):
        assert not export(scene, source, str(tmp_path / "missing" / ("out" + suffix)), settings)
    assert not (tmp_path / "missing").exists()


def test_null_source_fails_without_io(scene, settings, tmp_path):
    for export, _, suffix in all_exports(scene):
        path = tmp_path / ("null" + suffix)
        assert not export(scene, None, str(path), settings)
        assert not path.exists()


def test_unsupported_suffix_is_invalid_destination(scene, settings, tmp_path):
    mesh = scene.add_mesh("SM_Tri", triangle_geometry())
    assert not export_static_mesh(scene, mesh, str(tmp_path / "SM_Tri.skm"), settings)
    assert not export_static_mesh(scene, mesh, str(tmp_path / "SM_Tri.fbx"), settings)
    assert list(tmp_path.iterdir()) == []


def test_every_encoder_succeeds_on_valid_input(scene, settings, tmp_path):
    for export, source, suffix in all_exports(scene):
        path = tmp_path / ("out" + suffix)
        assert export(scene, source, str(path), settings), suffix
        assert path.stat().st_size > 0


def test_camera_has_no_binary_format(scene, settings, tmp_path):
    camera = scene.add_actor("Cam", SceneObjectKind.CAMERA)
    assert not export_camera(scene, camera, str(tmp_path / "Cam.stm"), settings)
    assert not export_camera(scene, camera, str(tmp_path / "Cam.cam"), settings)


def test_camera_json_document(scene, settings, tmp_path):
    rotation = Quaternion(Vector((0.0, 0.0, 1.0)), math.radians(90.0))
    camera = scene.add_actor("Cam", SceneObjectKind.CAMERA, location=(1.0, 2.0, 3.0),
                             rotation=rotation, camera=CameraView(fov=60.0, aspect_ratio=1.5))
    path = tmp_path / "Cam.json"

    assert export_camera(scene, camera, str(path), settings)

    doc = json.loads(path.read_text(encoding="utf-8"))
    assert doc["FileVersion"] == 1
    cam = doc["Camera"]
    assert cam["Location"] == {"x": 1.0, "y": 2.0, "z": 3.0}
    assert cam["Rotation"]["yaw"] == pytest.approx(90.0)
    assert cam["Rotation"]["roll"] == pytest.approx(0.0, abs=1e-4)
    assert cam["Rotation"]["pitch"] == pytest.approx(0.0, abs=1e-4)
    assert cam["FOV"] == 60.0
    assert cam["AspectRatio"] == 1.5


def test_skeletal_mesh_json_names_its_skeleton(scene, settings, tmp_path):
    skeleton = scene.add_skeleton("/Game/Chars/Hero.Hero:SK_Hero", three_bone_skeleton())
    mesh = scene.add_skeletal_mesh("/Game/Chars/SKM_Hero.SKM_Hero", triangle_geometry(), skeleton)
    path = tmp_path / "SKM_Hero.json"

    assert export_skeletal_mesh(scene, mesh, str(path), settings)

    doc = json.loads(path.read_text(encoding="utf-8"))
    assert doc["MeshName"] == "SKM_Hero"
    assert doc["Skeleton"] == "SK_Hero"


def test_open_failure_is_reported(scene, settings, tmp_path):
    mesh = scene.add_mesh("SM_Tri", triangle_geometry())
    blocked = tmp_path / "SM_Tri.stm"
    blocked.mkdir()

    audit = AuditLogger(str(tmp_path / "audit.log"))
    logger = Logger(audit_logger=audit, verbose=False)

    assert not export_static_mesh(scene, mesh, str(blocked), settings, logger)
    assert audit.codes() == [ErrorCode.IO001]


def test_failure_codes_are_logged(scene, settings, tmp_path):
    audit = AuditLogger(str(tmp_path / "audit.log"))
    logger = Logger(audit_logger=audit, verbose=False)
    overflow = scene.add_mesh("SM_Huge", triangle_geometry())
    scene.lods["SM_Huge"][0].indices = [0, 1, 70000]

    assert not export_static_mesh(scene, None, str(tmp_path / "a.stm"), settings, logger)
    assert not export_static_mesh(scene, overflow, "", settings, logger)
    assert not export_static_mesh(scene, overflow, str(tmp_path / "b.stm"), settings, logger)

    assert audit.codes() == [ErrorCode.RES001, ErrorCode.DST001, ErrorCode.ENC001]
    assert not audit.has_errors()


def test_success_is_logged_with_size(scene, settings, tmp_path, capsys):
    settings.verbose = True
    mesh = scene.add_mesh("SM_Tri", triangle_geometry())
    assert export_static_mesh(scene, mesh, str(tmp_path / "SM_Tri.stm"), settings)

    out = capsys.readouterr().out
    assert "[ObjectExporter] [INFO] ExportStaticMesh: success (110 字节)" in out
