"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from shapesight.engine.config import DetectionConfig


class Settings(BaseSettings):
    shapesight_env: str = "development"
    shapesight_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Detection defaults
    detect_threshold: int = 128
    detect_min_component_pixels: int = 50
    detect_min_boundary_points: int = 6
    detect_simplify_scale: float = 0.03
    detect_simplify_min_epsilon: float = 2.0
    detect_outline_source: str = "contour"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def detection_config(self) -> DetectionConfig:
        return DetectionConfig(
            threshold=self.detect_threshold,
            min_component_pixels=self.detect_min_component_pixels,
            min_boundary_points=self.detect_min_boundary_points,
            simplify_scale=self.detect_simplify_scale,
            simplify_min_epsilon=self.detect_simplify_min_epsilon,
            outline_source=self.detect_outline_source,
        )


settings = Settings()
