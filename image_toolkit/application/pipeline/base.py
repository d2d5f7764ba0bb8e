from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Protocol,
    TypedDict,
    runtime_checkable,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineContext:
    """State shared by the steps of one transform run.

    `input` is the request payload (source path, output path, transform,
    filters, watermark, attribution) and is never mutated. `artifacts` holds
    what steps produce: the decoded source, the plan, the working image, the
    encoded asset and the written paths.
    """

    RUN_ID_KEY: ClassVar[str] = "_run_id"

    input: Mapping[str, Any]
    artifacts: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.artifacts.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.artifacts[key] = value

    def update(self, **items: Any) -> None:
        self.artifacts.update(items)

    def has(self, key: str) -> bool:
        return key in self.artifacts

    def option(self, key: str, default: Any = None) -> Any:
        """Request option, with `default` standing in for absent or None."""
        value = self.input.get(key)
        return default if value is None else value

    def missing(self, keys: Iterable[str]) -> List[str]:
        return [k for k in keys if k not in self.artifacts]

    def require(self, keys: Iterable[str]) -> None:
        absent = self.missing(keys)
        if absent:
            raise KeyError(f"Missing required context keys: {', '.join(absent)}")

    def get_run_id(self) -> Optional[str]:
        return self.artifacts.get(self.RUN_ID_KEY)

    def ensure_run_id(self, factory: Optional[Callable[[], str]] = None) -> str:
        """Return the run id, creating one (12 hex chars by default) once."""
        run_id = self.get_run_id() or (factory() if factory else None)
        if not run_id:
            run_id = uuid.uuid4().hex[:12]
        self.artifacts[self.RUN_ID_KEY] = run_id
        return run_id


class StepStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


# A step that finished this way does not fail the run
FINISHED = (StepStatus.COMPLETED, StepStatus.SKIPPED)


@runtime_checkable
class Step(Protocol):
    async def __call__(self, context: PipelineContext) -> None:  # pragma: no cover - protocol
        ...


def step_name(step: Any) -> str:
    return getattr(step, "name", step.__class__.__name__)


class BaseStep(ABC):
    """A pipeline stage.

    Subclasses implement `run`, list the artifacts they read in
    `required_keys` and may opt out of a run through `can_skip`. Missing
    artifacts are a wiring error and raise KeyError before skipping is
    considered. Exceptions from `run` propagate unchanged.
    """

    name: str = "base_step"
    required_keys: List[str] = []

    status: StepStatus = StepStatus.PENDING
    last_error: Optional[Exception] = None
    duration: float = 0.0

    async def __call__(self, context: PipelineContext) -> None:
        self.last_error = None
        absent = context.missing(self.required_keys)
        if absent:
            raise KeyError(
                f"Missing required inputs for step '{self.name}': {', '.join(absent)}"
            )

        if self.can_skip(context):
            self.status = StepStatus.SKIPPED
            logger.debug("Step %s skipped", self.name)
            return

        self.status = StepStatus.RUNNING
        start = perf_counter()
        try:
            await self.run(context)
        except Exception as e:
            self.last_error = e
            self.status = StepStatus.FAILED
            raise
        else:
            self.status = StepStatus.COMPLETED
        finally:
            self.duration = perf_counter() - start
            logger.debug(
                "Step %s %s in %.3fs run_id=%s",
                self.name,
                self.status.value,
                self.duration,
                context.get_run_id(),
            )

    @abstractmethod
    async def run(self, context: PipelineContext) -> None:  # pragma: no cover - abstract
        ...

    def can_skip(self, context: PipelineContext) -> bool:
        return False


class StepResult(TypedDict):  # pragma: no cover - typing helper
    name: str
    status: str
    duration: float
    error: Optional[str]


class PipelineResult(TypedDict):  # pragma: no cover - typing helper
    success: bool
    duration: float
    steps: List[StepResult]
    error: Optional[str]
    context: PipelineContext


class Pipeline:
    """Runs steps in order over one context.

    With `fail_fast` the first exception propagates to the caller; otherwise
    it is recorded and the remaining steps still run.
    """

    def __init__(self, steps: List[Step], *, fail_fast: bool = True):
        self._steps = steps
        self.fail_fast = fail_fast

    @property
    def step_names(self) -> List[str]:
        return [step_name(s) for s in self._steps]

    async def _run_step(self, step: Step, context: PipelineContext) -> StepResult:
        info: StepResult = {
            "name": step_name(step),
            "status": StepStatus.RUNNING.value,
            "duration": 0.0,
            "error": None,
        }
        start = perf_counter()
        try:
            await step(context)
            info["status"] = getattr(step, "status", StepStatus.COMPLETED).value
        except Exception as e:
            info["status"] = StepStatus.FAILED.value
            info["error"] = str(e)
            if self.fail_fast:
                raise
        finally:
            info["duration"] = perf_counter() - start
        return info

    async def execute(self, context: PipelineContext) -> PipelineResult:
        context.ensure_run_id()
        start = perf_counter()
        steps: List[StepResult] = []
        for step in self._steps:
            steps.append(await self._run_step(step, context))

        errors = [s["error"] for s in steps if s["error"]]
        return {
            "success": all(StepStatus(s["status"]) in FINISHED for s in steps),
            "duration": perf_counter() - start,
            "steps": steps,
            "error": errors[-1] if errors else None,
            "context": context,
        }


class Middleware(Protocol):  # pragma: no cover - extension point
    def __call__(self, step: Step) -> Step: ...


class _LoggedStep:
    """Step wrapper that logs BEGIN/END lines around the inner step."""

    def __init__(self, inner: Step, log: logging.Logger, level_before: int, level_after: int):
        self._inner = inner
        self._log = log
        self._level_before = level_before
        self._level_after = level_after

    def __getattr__(self, item):
        # name, status, last_error come from the wrapped step
        return getattr(self._inner, item)

    async def __call__(self, context: PipelineContext) -> None:
        name = step_name(self._inner)
        run_id = context.get_run_id()
        self._log.log(self._level_before, "[run_id=%s] Step %s BEGIN", run_id, name)
        start = perf_counter()
        try:
            await self._inner(context)
        finally:
            status = getattr(self._inner, "status", StepStatus.PENDING)
            self._log.log(
                self._level_after,
                "[run_id=%s] Step %s END status=%s duration=%.3fs",
                run_id,
                name,
                getattr(status, "value", status),
                perf_counter() - start,
            )


def make_logging_middleware(
    logger_obj: logging.Logger | None = None,
    level_before: int = logging.DEBUG,
    level_after: int = logging.INFO,
) -> Middleware:
    """Middleware logging step name, run id, final status and duration."""
    log = logger_obj or logger

    def _middleware(step: Step) -> Step:
        return _LoggedStep(step, log, level_before, level_after)

    return _middleware
