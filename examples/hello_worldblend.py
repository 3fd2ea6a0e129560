from dataclasses import dataclass

import numpy as np

import worldblend


class LightingZones(worldblend.DistanceBlendEvaluator):
    pass


@dataclass(eq=False)
class LightZone(worldblend.DistanceBlendComponent):
    intensity: float = 1.0

    def get_scalar_multiplier(self) -> float:
        return self.intensity


def main() -> None:
    scene = worldblend.Scene("hello")
    lights = scene.get_subsystem(LightingZones)

    zones = [
        LightZone(owner=worldblend.SceneActor("cave", position=(0.0, 0.0, 0.0)), intensity=0.5),
        LightZone(owner=worldblend.SceneActor("forest", position=(50.0, 0.0, 0.0))),
        LightZone(owner=worldblend.SceneActor("beach", position=(100.0, 0.0, 0.0)), intensity=2.0),
    ]
    for zone in zones:
        zone.attach(lights)

    camera = worldblend.CameraRig("camera")
    scene.set_reference_target(camera)

    # Fly the camera along the zones and print how the blend shifts.
    for x in np.linspace(0.0, 100.0, 5):
        camera.set_viewpoint((float(x), 0.0, 10.0))
        lights.get_weights()
        shares = ", ".join(f"{z.owner.name}={z.blend_weight.weight:.3f}" for z in zones)
        print(f"frame {scene.frame:3d} x={x:6.1f}: {shares}")
        scene.tick()

    scene.teardown()


if __name__ == "__main__":
    main()
