from __future__ import annotations

from dataclasses import dataclass

import pytest

from worldblend import (
    BlendWeight,
    CameraRig,
    DistanceBlendComponent,
    DistanceBlendEvaluator,
    EvaluationState,
    Scene,
    SceneActor,
    weight_for,
)


class LightingZones(DistanceBlendEvaluator):
    pass


class AudioZones(DistanceBlendEvaluator):
    pass


@dataclass(eq=False)
class LightZone(DistanceBlendComponent):
    intensity: float = 1.0

    def get_scalar_multiplier(self) -> float:
        return self.intensity


def test_one_subsystem_instance_per_class() -> None:
    scene = Scene("level_01")
    lights = scene.get_subsystem(LightingZones)
    assert scene.get_subsystem(LightingZones) is lights
    assert scene.get_subsystem(AudioZones) is not lights
    assert lights.registry is not scene.get_subsystem(AudioZones).registry
    assert set(scene.subsystems()) == {"LightingZones", "AudioZones"}


def test_components_attach_and_receive_weights() -> None:
    scene = Scene("level_01")
    lights = scene.get_subsystem(LightingZones)

    bright = LightZone(owner=SceneActor("bright", position=(10.0, 0.0, 0.0)), intensity=2.0)
    dim = LightZone(owner=SceneActor("dim", position=(10.0, 0.0, 0.0)), intensity=1.0)
    bright.attach(lights)
    dim.attach(lights)
    bright.attach(lights)
    assert len(lights.registry) == 2
    assert bright.evaluator is lights

    camera = CameraRig("camera")
    scene.set_reference_target(camera)
    weights, valid = lights.get_weights()
    assert valid is True
    assert bright.blend_weight.weight == pytest.approx(2.0 / 3.0)
    assert dim.blend_weight.weight == pytest.approx(1.0 / 3.0)
    assert weight_for(weights, dim) is dim.blend_weight


def test_detach_unregisters_and_resets_record() -> None:
    scene = Scene()
    lights = scene.get_subsystem(LightingZones)
    zone = LightZone(owner=SceneActor("zone", position=(3.0, 0.0, 0.0)))
    zone.attach(lights)
    origin = SceneActor("origin")
    scene.set_reference_target(origin)
    lights.get_weights()
    assert zone.blend_weight.weight == pytest.approx(1.0)

    zone.detach()
    zone.detach()
    assert zone not in lights.registry
    assert zone.evaluator is None
    assert zone.blend_weight == BlendWeight()


def test_attach_moves_between_evaluators() -> None:
    scene = Scene()
    lights = scene.get_subsystem(LightingZones)
    audio = scene.get_subsystem(AudioZones)
    zone = LightZone(owner=SceneActor("zone"))

    zone.attach(lights)
    zone.attach(audio)
    assert zone not in lights.registry
    assert zone in audio.registry


def test_tick_makes_weights_stale() -> None:
    scene = Scene()
    lights = scene.get_subsystem(LightingZones)
    zone = LightZone(owner=SceneActor("zone", position=(3.0, 0.0, 0.0)))
    zone.attach(lights)
    origin = SceneActor("origin")
    scene.set_reference_target(origin)

    first, _ = lights.get_weights()
    assert lights.state is EvaluationState.FRESH
    assert scene.tick() == 1
    assert lights.state is EvaluationState.STALE
    second, _ = lights.get_weights()
    assert second is not first


def test_teardown_releases_everything() -> None:
    scene = Scene("gone")
    lights = scene.get_subsystem(LightingZones)
    zone = LightZone(owner=SceneActor("zone"))
    zone.attach(lights)
    origin = SceneActor("origin")
    scene.set_reference_target(origin)

    scene.teardown()
    scene.teardown()
    assert lights.reference_target is None
    assert len(lights.registry) == 0
    assert scene.subsystems() == {}
    with pytest.raises(RuntimeError):
        scene.get_subsystem(LightingZones)
    with pytest.raises(RuntimeError):
        scene.tick()


def test_subsystem_created_after_target_inherits_it() -> None:
    scene = Scene()
    audio = scene.get_subsystem(AudioZones)
    camera = CameraRig("camera")
    scene.set_reference_target(camera)

    lights = scene.get_subsystem(LightingZones)
    assert scene.reference_target is camera
    assert audio.reference_target is camera
    assert lights.reference_target is camera

    zone = LightZone(owner=SceneActor("zone", position=(3.0, 0.0, 0.0)))
    zone.attach(lights)
    weights, valid = lights.get_weights()
    assert valid is True
    assert weights[0].entity is zone


def test_scene_target_cleared_on_teardown() -> None:
    scene = Scene()
    origin = SceneActor("origin")
    scene.set_reference_target(origin)
    scene.teardown()
    assert scene.reference_target is None
