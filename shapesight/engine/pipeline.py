"""Pipeline orchestrator — runs stages in dependency order over one raster."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from shapesight.engine.config import DetectionConfig
from shapesight.engine.context import DetectionContext, Raster, Shape
from shapesight.engine.errors import InputNotReadyError
from shapesight.engine.registry import Layer, StageRegistry, get_registry

logger = logging.getLogger(__name__)

_STAGE_PACKAGES = ["layer0", "layer1", "layer2", "layer3"]


def register_stages() -> None:
    """Import all stage modules so @stage decorators fire. Idempotent."""
    for layer_name in _STAGE_PACKAGES:
        package = importlib.import_module(f"shapesight.engine.{layer_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")


class Pipeline:
    """Orchestrates the detection stages."""

    def __init__(
        self,
        registry: StageRegistry | None = None,
        config: DetectionConfig | None = None,
    ) -> None:
        if registry is None:
            register_stages()
            registry = get_registry()
        self.registry = registry
        self.config = config or DetectionConfig()

    def run(self, ctx: DetectionContext) -> DetectionContext:
        """Run every registered stage on the given context."""
        ctx.config = self.config
        if ctx.raster.is_empty:
            ctx.input_ready = False
            ctx.shapes = []
            logger.warning(
                "Raster is %dx%d — no input available, skipping detection",
                ctx.raster.width,
                ctx.raster.height,
            )
            return ctx

        start = time.perf_counter()
        skip_ids = self._gate(ctx)
        ordered = self.registry.resolve_order(skip_ids)

        logger.info(
            "Pipeline: %d stages queued (%d skipped) for %dx%d raster",
            len(ordered),
            len(skip_ids),
            ctx.width,
            ctx.height,
        )

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_stages.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d stages, %d shapes in %.0fms",
            len(ctx.completed_stages),
            len(ordered),
            len(ctx.shapes),
            total,
        )
        return ctx

    def _gate(self, ctx: DetectionContext) -> set[str]:
        """Stage ids whose output this configuration never reads."""
        skip: set[str] = set()
        if ctx.config.outline_source == "hull":
            skip.add("S1.02")  # simplifier reads the hull
        return skip

    def run_layer(self, ctx: DetectionContext, layer: Layer) -> DetectionContext:
        """Run only stages in a specific layer."""
        ctx.config = self.config
        for spec in self.registry.get_layer(layer):
            try:
                spec.fn(ctx)
                ctx.completed_stages.add(spec.id)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
        return ctx


def create_pipeline(config: DetectionConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    return Pipeline(config=config)


def detect(raster: Raster, config: DetectionConfig | None = None) -> list[Shape]:
    """Detect and classify the dark shapes in a raster.

    A pure function of (raster, config). Raises InputNotReadyError when the
    raster has zero width or height.
    """
    ctx = create_pipeline(config).run(DetectionContext(raster=raster))
    if not ctx.input_ready:
        raise InputNotReadyError()
    return list(ctx.shapes)
