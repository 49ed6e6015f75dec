"""Transform registry — every pipeline stage is a standalone function registered via decorator.

Usage:
    @transform(id="T2.01", layer=Layer.CONTOUR, dependencies=["T1.01"])
    def boundary_trace(ctx: DetectionContext) -> None:
        for blob in ctx.blobs:
            blob.boundary, blob.closed = moore_trace(...)

Adding a new transform = creating one file with the decorator. Nothing else changes.
"""

from __future__ import annotations

import enum
import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from shapesight.engine.context import DetectionContext

logger = logging.getLogger(__name__)

_LAYER_PACKAGES = ["layer0", "layer1", "layer2", "layer3"]


class Layer(enum.IntEnum):
    PREPROCESSING = 0
    SEGMENTATION = 1
    CONTOUR = 2
    CLASSIFICATION = 3


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["DetectionContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class TransformRegistry:
    """Registry of pipeline transforms keyed by transform ID."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        specs = [s for s in self._transforms.values() if s.layer == layer]
        return sorted(specs, key=lambda s: s.id)

    def resolve_order(self) -> list[TransformSpec]:
        """Topological sort respecting dependencies, ties broken by ID."""
        pool = self._transforms

        # Kahn's algorithm
        in_degree: dict[str, int] = {tid: 0 for tid in pool}
        for tid, spec in pool.items():
            for dep in spec.dependencies:
                if dep in pool:
                    in_degree[tid] += 1

        queue = sorted([tid for tid, d in in_degree.items() if d == 0])
        ordered: list[TransformSpec] = []

        while queue:
            tid = queue.pop(0)
            ordered.append(pool[tid])
            for other_id, other_spec in pool.items():
                if tid in other_spec.dependencies:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        queue.append(other_id)
                        queue.sort()

        if len(ordered) != len(pool):
            missing = set(pool.keys()) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singleton
_registry = TransformRegistry()
_loaded = False


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a transform function."""

    def decorator(fn: Callable[["DetectionContext"], None]):
        spec = TransformSpec(
            id=id,
            layer=layer,
            fn=fn,
            dependencies=dependencies or [],
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator


def load_transforms() -> TransformRegistry:
    """Import every layer module so @transform decorators fire. Scans once per process."""
    global _loaded
    if _loaded:
        return _registry
    for layer_name in _LAYER_PACKAGES:
        package = importlib.import_module(f"shapesight.engine.{layer_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")
    _loaded = True
    logger.info("Loaded %d transforms", _registry.count)
    return _registry
