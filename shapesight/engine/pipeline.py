"""Pipeline orchestrator — runs transforms in dependency order."""

from __future__ import annotations

import logging
import time

from shapesight.engine.config import DetectorConfig
from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, TransformRegistry, get_registry, load_transforms
from shapesight.engine.results import DetectionResult
from shapesight.utils.imaging import as_rgba_buffer

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates the transform pipeline."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: DetectorConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or DetectorConfig()

    def run(self, ctx: DetectionContext) -> DetectionContext:
        """Run the full pipeline on the given context."""
        start = time.perf_counter()
        ctx.config = self.config

        ordered = self.registry.resolve_order()
        logger.info("Pipeline: %d transforms queued", len(ordered))

        for spec in ordered:
            failed_deps = [d for d in spec.dependencies if d in ctx.errors]
            if failed_deps:
                ctx.errors[spec.id] = f"skipped: dependency failed ({', '.join(failed_deps)})"
                logger.warning("  %s SKIPPED: %s failed", spec.id, ", ".join(failed_deps))
                continue

            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms in %.0fms",
            len(ctx.completed_transforms),
            len(ordered),
            total,
        )
        return ctx

    def run_layer(self, ctx: DetectionContext, layer: Layer) -> DetectionContext:
        """Run only transforms in a specific layer."""
        ctx.config = self.config
        specs = self.registry.get_layer(layer)
        for spec in specs:
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
        return ctx


def create_pipeline(config: DetectorConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline over the registered transforms."""
    load_transforms()
    return Pipeline(config=config)


def create_context(pixels: object, width: int, height: int) -> DetectionContext:
    """Validate a raw RGBA buffer and wrap it in a fresh context.

    Raises InvalidImageError before any transform runs.
    """
    rgba = as_rgba_buffer(pixels, width, height)
    return DetectionContext(pixels=rgba, width=int(width), height=int(height))


def detect(
    pixels: object,
    width: int,
    height: int,
    config: DetectorConfig | None = None,
) -> DetectionResult:
    """Detect shapes in a row-major RGBA buffer of width × height pixels.

    An image without shapes is a normal result with an empty shape list.
    """
    start = time.perf_counter()

    ctx = create_context(pixels, width, height)
    ctx = create_pipeline(config).run(ctx)

    elapsed = (time.perf_counter() - start) * 1000
    if ctx.errors:
        logger.warning("Detection finished with %d failed transforms: %s", len(ctx.errors), ctx.errors)
    logger.info(
        "Detected %d shapes in %d blobs (%dx%d, threshold %d) in %.1fms",
        len(ctx.shapes),
        ctx.num_blobs,
        ctx.width,
        ctx.height,
        ctx.threshold,
        elapsed,
    )

    return DetectionResult(
        shapes=list(ctx.shapes),
        processing_time=elapsed,
        image_width=ctx.width,
        image_height=ctx.height,
    )
