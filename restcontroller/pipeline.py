"""
Plug pipelines: declaring, building and running the steps in front of an action.

A pipeline is an ordered list of steps. Each step receives the connection and
its options and returns the connection; a halted connection stops the run.
Controllers declare their steps with ``plug()`` and get the baseline
parameter and content-type fetchers prepended unless they are ``bare``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .exceptions import InvalidStepResultError, PipelineConfigurationError
from .models import Connection

logger = logging.getLogger(__name__)

# Reserved step identity for the terminal "dispatch the action" step
ACTION = "action"


class Plug:
    """Base class for reusable pipeline steps.

    ``init`` runs once when the pipeline is built and may normalize the
    options; ``call`` runs per request with the options ``init`` returned.
    """

    def init(self, options: Dict[str, Any]) -> Dict[str, Any]:
        return options

    def call(self, conn: Connection, options: Dict[str, Any]) -> Connection:
        raise NotImplementedError

    def __repr__(self):
        return self.__class__.__name__


StepTarget = Union[str, type, Plug, Callable[[Connection, Dict[str, Any]], Connection]]


@dataclass(frozen=True)
class Step:
    """One declared pipeline step and the options it is called with."""

    target: StepTarget
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_action(self) -> bool:
        return isinstance(self.target, str) and self.target == ACTION

    @property
    def label(self) -> str:
        if isinstance(self.target, str):
            return self.target
        if isinstance(self.target, type):
            return self.target.__name__
        return getattr(self.target, "__name__", repr(self.target))


def plug(target: StepTarget, **options: Any) -> Step:
    """Declare a pipeline step.

    Examples:
        plug("authenticate", usernames=["jose", "eric"])
        plug(ACTION)
        plug(RequireJSON)
    """
    return Step(target, options)


def plugged(steps: Iterable[Step], target: StepTarget) -> bool:
    """Check whether a step list already contains ``target``."""
    return any(step.target == target for step in steps)


def build_steps(
    declared: Sequence[Step],
    bare: bool = False,
    baseline: Optional[Sequence[Step]] = None,
) -> Tuple[Step, ...]:
    """Combine the baseline and declared steps into the final step list.

    The baseline steps come first unless ``bare`` is set. The ACTION step
    stays where it was declared, or is appended when it was not declared.

    Raises:
        PipelineConfigurationError: If ACTION is declared more than once.
    """
    if baseline is None:
        from .plugs import BASELINE_STEPS
        baseline = BASELINE_STEPS

    steps: List[Step] = [] if bare else list(baseline)
    steps.extend(declared)

    action_count = sum(1 for step in steps if step.is_action)
    if action_count > 1:
        raise PipelineConfigurationError(
            f"The {ACTION!r} step may only be declared once, found {action_count}"
        )
    if action_count == 0:
        steps.append(Step(ACTION))

    return tuple(steps)


# A compiled step takes (owner, conn); owner is the controller instance
CompiledStep = Tuple[str, Callable[[Any, Connection], Connection]]


class Pipeline:
    """Runs compiled steps in order until one halts the connection."""

    def __init__(self, steps: Sequence[CompiledStep]):
        self.steps = tuple(steps)

    @property
    def labels(self) -> List[str]:
        return [label for label, _ in self.steps]

    def __call__(self, conn: Connection, owner: Any = None) -> Connection:
        for label, func in self.steps:
            logger.debug(f"  → {label}")
            result = func(owner, conn)
            if not isinstance(result, Connection):
                raise InvalidStepResultError(label, result)
            conn = result
            if halted(conn):
                logger.debug(f"  ✗ Halted by {label}")
                break
        return conn

    def __len__(self):
        return len(self.steps)

    def __repr__(self):
        return f"Pipeline({self.labels!r})"


def halted(conn: Connection) -> bool:
    return conn.halted


def compile_steps(steps: Sequence[Step], owner: Optional[type] = None) -> Pipeline:
    """Turn declared steps into a runnable Pipeline.

    String targets name methods on ``owner`` (the ACTION step resolves to
    ``owner.dispatch_action``). Plug classes are instantiated and their
    ``init`` run here, once.

    Raises:
        PipelineConfigurationError: If a named step does not exist on owner
            or a target is not callable.
    """
    return Pipeline([_compile_step(step, owner) for step in steps])


def _compile_step(step: Step, owner: Optional[type]) -> CompiledStep:
    target = step.target
    options = step.options

    if isinstance(target, str):
        method_name = "dispatch_action" if step.is_action else target
        if owner is None or not callable(getattr(owner, method_name, None)):
            owner_name = owner.__name__ if owner is not None else "pipeline"
            raise PipelineConfigurationError(f"{owner_name} has no step named {target!r}")

        def call_method(instance, conn, _name=method_name, _options=options):
            return getattr(instance, _name)(conn, _options)

        return step.label, call_method

    if isinstance(target, type) and issubclass(target, Plug):
        target = target()

    if isinstance(target, Plug):
        plug_options = target.init(dict(options))

        def call_plug(instance, conn, _plug=target, _options=plug_options):
            return _plug.call(conn, _options)

        return step.label, call_plug

    if callable(target):
        def call_function(instance, conn, _func=target, _options=options):
            return _func(conn, _options)

        return step.label, call_function

    raise PipelineConfigurationError(f"Pipeline step {target!r} is not callable")
