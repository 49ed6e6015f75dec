"""Tests for the pipeline orchestrator."""

from shapesight.engine.config import DetectorConfig
from shapesight.engine.context import DetectionContext
from shapesight.engine.pipeline import Pipeline
from shapesight.engine.registry import Layer, TransformRegistry, TransformSpec


def test_pipeline_runs_transforms():
    reg = TransformRegistry()
    results = []

    def t1(ctx: DetectionContext) -> None:
        results.append("t1")

    def t2(ctx: DetectionContext) -> None:
        results.append("t2")

    reg.register(TransformSpec(id="T0.02", layer=Layer.PREPROCESSING, fn=t2, dependencies=["T0.01"]))
    reg.register(TransformSpec(id="T0.01", layer=Layer.PREPROCESSING, fn=t1))

    pipeline = Pipeline(registry=reg)
    ctx = DetectionContext()
    pipeline.run(ctx)

    assert results == ["t1", "t2"]
    assert "T0.01" in ctx.completed_transforms
    assert "T0.02" in ctx.completed_transforms


def test_pipeline_handles_errors():
    reg = TransformRegistry()

    def fail(ctx: DetectionContext) -> None:
        raise ValueError("test error")

    reg.register(TransformSpec(id="T0.01", layer=Layer.PREPROCESSING, fn=fail))

    pipeline = Pipeline(registry=reg)
    ctx = DetectionContext()
    pipeline.run(ctx)

    assert "T0.01" in ctx.errors
    assert "test error" in ctx.errors["T0.01"]


def test_pipeline_skips_dependents_of_failed_transform():
    reg = TransformRegistry()
    ran = []

    def fail(ctx: DetectionContext) -> None:
        raise RuntimeError("boom")

    def downstream(ctx: DetectionContext) -> None:
        ran.append("downstream")

    def independent(ctx: DetectionContext) -> None:
        ran.append("independent")

    reg.register(TransformSpec(id="T0.01", layer=Layer.PREPROCESSING, fn=fail))
    reg.register(TransformSpec(id="T1.01", layer=Layer.SEGMENTATION, fn=downstream, dependencies=["T0.01"]))
    reg.register(TransformSpec(id="T2.01", layer=Layer.CONTOUR, fn=downstream, dependencies=["T1.01"]))
    reg.register(TransformSpec(id="T3.01", layer=Layer.CLASSIFICATION, fn=independent))

    ctx = Pipeline(registry=reg).run(DetectionContext())

    assert ran == ["independent"]
    assert ctx.errors["T0.01"] == "boom"
    assert ctx.errors["T1.01"].startswith("skipped")
    assert ctx.errors["T2.01"].startswith("skipped")
    assert ctx.completed_transforms == {"T3.01"}


def test_pipeline_sets_config():
    reg = TransformRegistry()
    seen = []

    def probe(ctx: DetectionContext) -> None:
        seen.append(ctx.config.min_area)

    reg.register(TransformSpec(id="T0.01", layer=Layer.PREPROCESSING, fn=probe))
    Pipeline(registry=reg, config=DetectorConfig(min_area=7)).run(DetectionContext())
    assert seen == [7]


def test_run_layer_only_touches_layer():
    reg = TransformRegistry()
    ran = []
    reg.register(TransformSpec(id="T0.01", layer=Layer.PREPROCESSING, fn=lambda ctx: ran.append("T0.01")))
    reg.register(TransformSpec(id="T1.01", layer=Layer.SEGMENTATION, fn=lambda ctx: ran.append("T1.01")))

    ctx = Pipeline(registry=reg).run_layer(DetectionContext(), Layer.SEGMENTATION)
    assert ran == ["T1.01"]
    assert ctx.completed_transforms == {"T1.01"}
