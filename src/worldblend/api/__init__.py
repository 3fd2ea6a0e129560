from __future__ import annotations

from fastapi import FastAPI, HTTPException

from ..core.evaluator import DistanceBlendEvaluator
from ..core.scene import Scene
from .serializers import scene_to_dict, settings_to_dict, weights_to_dict


def create_api_app(scene: Scene) -> FastAPI:
    """Debug inspection endpoints for a live scene.

    Consumers get their weights in-process; this is only for looking at them.
    """
    app = FastAPI(title="worldblend", version="0.1.0")

    def _subsystem(name: str) -> DistanceBlendEvaluator:
        sub = scene.subsystems().get(name)
        if sub is None:
            raise HTTPException(status_code=404, detail=f"Unknown subsystem: {name}")
        return sub

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/api/scene")
    def get_scene() -> dict:
        return scene_to_dict(scene)

    @app.get("/api/subsystems/{name}/weights")
    def get_weights(name: str) -> dict:
        # Read only: evaluation belongs to the frame-update context.
        weights, valid = _subsystem(name).current_weights()
        return {"frame": int(scene.frame), **weights_to_dict(weights, valid)}

    @app.get("/api/subsystems/{name}/weights/last-valid")
    def get_last_valid_weights(name: str) -> dict:
        weights, valid = _subsystem(name).get_last_valid_weights()
        return weights_to_dict(weights, valid)

    @app.get("/api/settings")
    def get_settings() -> dict:
        return settings_to_dict(scene.settings.get())

    @app.patch("/api/settings")
    def update_settings(body: dict) -> dict:
        # Supported:
        # - coordinateConvention: 'rh-y-up' | 'rh-z-up'
        # - horizontalDistanceOnly: bool
        # - minDistance: float > 0
        fields = {
            "coordinateConvention": "coordinate_convention",
            "horizontalDistanceOnly": "horizontal_distance_only",
            "minDistance": "min_distance",
        }
        changes = {py: body[js] for js, py in fields.items() if js in body}
        if not changes:
            raise HTTPException(status_code=400, detail=f"Expected at least one of: {', '.join(fields)}")
        try:
            updated = scene.settings.update(**changes)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"ok": True, **settings_to_dict(updated)}

    return app


__all__ = ["create_api_app"]
