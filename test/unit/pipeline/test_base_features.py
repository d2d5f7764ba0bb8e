from __future__ import annotations

import logging
import pytest

from image_toolkit.application.pipeline.base import (
    BaseStep,
    PipelineContext,
    StepStatus,
    make_logging_middleware,
)
from image_toolkit.application.pipeline.factory import PipelineFactory


class _ReqKeysStep(BaseStep):
    name = "req_keys"
    required_keys = ["needed"]

    async def run(self, context: PipelineContext) -> None:  # pragma: no cover - not reached
        context.set("ok", True)


class _SkipStep(BaseStep):
    name = "skip_me"

    def can_skip(self, context: PipelineContext) -> bool:
        return True

    async def run(self, context: PipelineContext) -> None:  # pragma: no cover - skipped
        context.set("ran", True)


class _FailingStep(BaseStep):
    name = "always_fail"

    async def run(self, context: PipelineContext) -> None:
        raise ValueError("boom")


class _SimpleStep(BaseStep):
    name = "simple"

    async def run(self, context: PipelineContext) -> None:
        context.set("simple", True)


class _RequireThenSkipStep(BaseStep):
    name = "require_then_skip"
    required_keys = ["needed"]

    def can_skip(self, context: PipelineContext) -> bool:
        return True

    async def run(self, context: PipelineContext) -> None:  # pragma: no cover
        pass


@pytest.mark.asyncio
async def test_required_keys_missing_raises():
    factory = PipelineFactory()
    factory.add(_ReqKeysStep())
    pipeline = factory.build()

    ctx = PipelineContext(input={})
    with pytest.raises(KeyError):
        await pipeline.execute(ctx)


@pytest.mark.asyncio
async def test_required_keys_checked_before_skip():
    pipeline = PipelineFactory().add(_RequireThenSkipStep()).build()
    with pytest.raises(KeyError, match="needed"):
        await pipeline.execute(PipelineContext(input={}))


@pytest.mark.asyncio
async def test_skipped_step_counts_as_success():
    factory = PipelineFactory()
    factory.add(_SkipStep()).add(_SimpleStep())
    pipeline = factory.build()

    ctx = PipelineContext(input={})
    result = await pipeline.execute(ctx)

    assert result["success"] is True
    assert result["steps"][0]["status"] == StepStatus.SKIPPED.value
    assert result["steps"][1]["status"] == StepStatus.COMPLETED.value
    assert ctx.get("ran") is None


@pytest.mark.asyncio
async def test_failed_step_records_error_and_status():
    step = _FailingStep()
    pipeline = PipelineFactory().add(step).build()

    with pytest.raises(ValueError):
        await pipeline.execute(PipelineContext(input={}))
    assert step.status == StepStatus.FAILED
    assert isinstance(step.last_error, ValueError)


@pytest.mark.asyncio
async def test_fail_fast_false_continues_on_error():
    factory = PipelineFactory(fail_fast=False)
    factory.add(_FailingStep()).add(_SimpleStep())
    pipeline = factory.build()

    ctx = PipelineContext(input={})
    result = await pipeline.execute(ctx)

    assert result["success"] is False
    assert result["error"] == "boom"
    assert result["steps"][0]["status"] == StepStatus.FAILED.value
    assert result["steps"][1]["status"] == StepStatus.COMPLETED.value
    assert ctx.get("simple") is True


@pytest.mark.asyncio
async def test_logging_middleware_emits_begin_end(caplog):
    caplog.set_level(logging.DEBUG)
    factory = PipelineFactory(middlewares=[make_logging_middleware()])
    factory.add(_SimpleStep())
    pipeline = factory.build()

    ctx = PipelineContext(input={})
    await pipeline.execute(ctx)

    logs = "\n".join(rec.getMessage() for rec in caplog.records)
    assert "BEGIN" in logs
    assert "END status=completed" in logs
    assert ctx.get_run_id() in logs


@pytest.mark.asyncio
async def test_wrapped_step_preserves_name():
    factory = PipelineFactory(middlewares=[make_logging_middleware()])
    step = _SimpleStep()
    factory.add(step)
    pipeline = factory.build()

    ctx = PipelineContext(input={})
    result = await pipeline.execute(ctx)

    assert result["steps"][0]["name"] == step.name
    assert pipeline.step_names == ["simple"]


def test_context_option_falls_back_on_none():
    ctx = PipelineContext(input={"quality": None, "format": "png"})
    assert ctx.option("quality", 100) == 100
    assert ctx.option("format", "webp") == "png"
    assert ctx.option("missing") is None


def test_context_run_id_is_stable():
    ctx = PipelineContext(input={})
    rid = ctx.ensure_run_id()
    assert len(rid) == 12
    assert ctx.ensure_run_id() == rid
    assert PipelineContext(input={}).ensure_run_id(lambda: "fixed") == "fixed"


def test_context_require_lists_missing_keys():
    ctx = PipelineContext(input={})
    ctx.update(a=1)
    ctx.require(["a"])
    with pytest.raises(KeyError, match="b, c"):
        ctx.require(["a", "b", "c"])
