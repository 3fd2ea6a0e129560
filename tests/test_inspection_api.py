from __future__ import annotations

import pytest

from worldblend import CameraRig, DistanceBlendComponent, DistanceBlendEvaluator, Scene, SceneActor
from worldblend.api import create_api_app


class FogVolumes(DistanceBlendEvaluator):
    pass


def _client(scene: Scene):
    testclient = pytest.importorskip("fastapi.testclient", reason="install test extras to run this test")
    return testclient.TestClient(create_api_app(scene))


def test_scene_and_weights_endpoints() -> None:
    scene = Scene("level_api")
    fog = scene.get_subsystem(FogVolumes)
    near = DistanceBlendComponent(owner=SceneActor("near", position=(10.0, 0.0, 0.0)))
    far = DistanceBlendComponent(owner=SceneActor("far", position=(30.0, 0.0, 0.0)))
    near.attach(fog)
    far.attach(fog)
    camera = CameraRig("camera")
    scene.set_reference_target(camera)

    client = _client(scene)
    assert client.get("/healthz").json() == {"ok": True}

    info = client.get("/api/scene").json()
    assert info["name"] == "level_api"
    assert info["frame"] == 0
    (sub,) = info["subsystems"]
    assert sub["name"] == "FogVolumes"
    assert sub["state"] == "stale"
    assert sub["entityCount"] == 2
    assert sub["target"] == "camera"

    before = client.get("/api/subsystems/FogVolumes/weights").json()
    assert before["valid"] is False
    assert before["count"] == 0

    fog.get_weights()
    body = client.get("/api/subsystems/FogVolumes/weights").json()
    assert body["valid"] is True
    assert body["count"] == 2
    assert [w["entity"] for w in body["weights"]] == ["near", "far"]
    assert body["weights"][0]["weight"] == pytest.approx(0.75)
    assert body["weights"][1]["distanceBias"] == pytest.approx(2.0 / 3.0)

    last = client.get("/api/subsystems/FogVolumes/weights/last-valid").json()
    assert last["valid"] is True
    assert last["count"] == 2

    assert client.get("/api/subsystems/Nope/weights").status_code == 404


def test_last_valid_before_any_evaluation() -> None:
    scene = Scene()
    scene.get_subsystem(FogVolumes)
    client = _client(scene)

    body = client.get("/api/subsystems/FogVolumes/weights/last-valid").json()
    assert body == {"valid": False, "count": 0, "weights": []}


def test_settings_roundtrip_and_validation() -> None:
    scene = Scene()
    client = _client(scene)

    s = client.get("/api/settings").json()
    assert s["coordinateConvention"] == "rh-z-up"
    assert s["horizontalDistanceOnly"] is True

    updated = client.patch("/api/settings", json={"coordinateConvention": "y-up", "horizontalDistanceOnly": False})
    assert updated.status_code == 200
    assert updated.json()["coordinateConvention"] == "rh-y-up"
    assert scene.settings.get().horizontal_distance_only is False

    assert client.patch("/api/settings", json={}).status_code == 400
    assert client.patch("/api/settings", json={"coordinateConvention": "sideways"}).status_code == 400
    assert client.patch("/api/settings", json={"minDistance": -1}).status_code == 400


def test_weights_endpoint_does_not_evaluate() -> None:
    scene = Scene()
    fog = scene.get_subsystem(FogVolumes)
    zone = DistanceBlendComponent(owner=SceneActor("high", position=(3.0, 4.0, 100.0)))
    zone.attach(fog)
    camera = CameraRig("camera")
    scene.set_reference_target(camera)
    client = _client(scene)

    client.get("/api/subsystems/FogVolumes/weights", params={"horizontal": "false"})
    assert fog.last_evaluated_frame is None
    assert zone.blend_weight.entity is None

    weights, valid = fog.get_weights()
    assert valid is True
    assert weights[0].distance == pytest.approx(5.0)
