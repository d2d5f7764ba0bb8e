from __future__ import annotations

from typing import Iterable, List

from image_toolkit.application.pipeline.base import Pipeline, Step, Middleware


def _step_name(step: Step) -> str:
    return getattr(step, "name", step.__class__.__name__)


class PipelineFactory:
    """Collect steps in execution order and build a Pipeline.

    Every step is wrapped by the configured middlewares, first middleware
    innermost. Step names are unique within a pipeline since results and
    logs refer to steps by name.

    Example:
        pipeline = PipelineFactory(fail_fast=True).extend([load, plan, encode]).build()
    """

    def __init__(self, *, middlewares: List[Middleware] | None = None, fail_fast: bool = True):
        self._steps: List[Step] = []
        self._middlewares = list(middlewares or [])
        self._fail_fast = fail_fast

    @property
    def step_names(self) -> List[str]:
        return [_step_name(s) for s in self._steps]

    def add(self, step: Step) -> "PipelineFactory":
        name = _step_name(step)
        if name in self.step_names:
            raise ValueError(f"Duplicate pipeline step: {name}")
        for mw in self._middlewares:
            step = mw(step)
        self._steps.append(step)
        return self

    def extend(self, steps: Iterable[Step]) -> "PipelineFactory":
        for step in steps:
            self.add(step)
        return self

    def build(self) -> Pipeline:
        if not self._steps:
            raise ValueError("Cannot build a pipeline without steps")
        return Pipeline(list(self._steps), fail_fast=self._fail_fast)
