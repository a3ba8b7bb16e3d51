"""Lazily evaluated value pipeline over a restartable source."""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Callable,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Protocol,
    Tuple,
    TypeVar,
    runtime_checkable,
)

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")
C = TypeVar("C")

_MISSING = object()


class PipelineStageError(TypeError):
    """Raised when a pipeline stage is not callable."""


@runtime_checkable
class PipelineSource(Protocol[T]):
    """A producer that yields a fresh iteration each time it is iterated."""

    def __iter__(self) -> Iterator[T]:
        ...


@dataclass(frozen=True)
class SequenceSource(Generic[T]):
    """Finite source backed by a snapshot of the given values."""

    items: Tuple[T, ...]

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)


@dataclass(frozen=True)
class GeneratedSource(Generic[T]):
    """Source that starts at ``seed`` and advances with ``step`` while ``continue_while`` holds.

    The sequence may be infinite.
    """

    seed: T
    step: Callable[[T], T]
    continue_while: Callable[[T], bool]

    def __iter__(self) -> Iterator[T]:
        current = self.seed
        while self.continue_while(current):
            yield current
            current = self.step(current)


@dataclass(frozen=True)
class Filter(Generic[T]):
    predicate: Callable[[T], bool]


@dataclass(frozen=True)
class Transform(Generic[T]):
    function: Callable[[T], T]


def _require_callable(stage: object, operation: str) -> None:
    if not callable(stage):
        raise PipelineStageError(f"{operation}() requires a callable, got {stage!r}")


class LazyPipeline(Generic[T]):
    """Records filter and transform stages and replays them on terminal calls.

    Stage registration only appends to a list. ``reduce`` and ``collect`` iterate the
    source afresh on every call: each element must pass every filter (evaluated on the
    original element, in registration order) before all transforms are applied to it,
    in registration order. Filters and transforms never interleave.
    """

    def __init__(self, source: PipelineSource[T]) -> None:
        if not isinstance(source, PipelineSource):
            raise TypeError(f"Pipeline source must be iterable, got {source!r}")
        if iter(source) is source:
            # One-shot iterators are snapshotted so every terminal call can restart.
            source = SequenceSource(tuple(source))
        self._source = source
        self._filters: List[Filter[T]] = []
        self._transforms: List[Transform[T]] = []

    @classmethod
    def of(cls, *values: T) -> "LazyPipeline[T]":
        return cls(SequenceSource(tuple(values)))

    @classmethod
    def from_sequence(cls, values: Iterable[T]) -> "LazyPipeline[T]":
        if values is None:
            raise TypeError("from_sequence() requires an iterable, got None")
        return cls(SequenceSource(tuple(values)))

    @classmethod
    def iterate(
        cls,
        seed: T,
        step: Callable[[T], T],
        continue_while: Callable[[T], bool],
    ) -> "LazyPipeline[T]":
        """Build a pipeline over ``seed, step(seed), ...`` while ``continue_while`` holds.

        No upper bound is enforced: a terminal call over a source whose predicate never
        fails does not return.
        """
        _require_callable(step, "iterate")
        _require_callable(continue_while, "iterate")
        return cls(GeneratedSource(seed, step, continue_while))

    @property
    def source(self) -> PipelineSource[T]:
        return self._source

    @property
    def filters(self) -> Tuple[Filter[T], ...]:
        return tuple(self._filters)

    @property
    def transforms(self) -> Tuple[Transform[T], ...]:
        return tuple(self._transforms)

    def map(self, fn: Callable[[T], T]) -> "LazyPipeline[T]":
        _require_callable(fn, "map")
        self._transforms.append(Transform(fn))
        return self

    function = map

    def filter(self, pred: Callable[[T], bool]) -> "LazyPipeline[T]":
        _require_callable(pred, "filter")
        self._filters.append(Filter(pred))
        return self

    def reduce(self, op: Callable[[T, T], T]) -> Optional[T]:
        """Fold surviving values left to right.

        Returns ``None`` when no element survives. A fold whose result is itself ``None``
        cannot be told apart from an empty pipeline; use ``collect`` when that matters.
        """
        _require_callable(op, "reduce")
        accumulator: object = _MISSING
        survivors = 0
        for value in self._evaluate():
            survivors += 1
            accumulator = value if accumulator is _MISSING else op(accumulator, value)
        self._log_evaluation("reduce", survivors)
        return None if accumulator is _MISSING else accumulator  # type: ignore[return-value]

    def collect(self, factory: Callable[[], C], accumulator: Callable[[C, T], object]) -> C:
        """Feed each surviving value into a container created once by ``factory``."""
        _require_callable(factory, "collect")
        _require_callable(accumulator, "collect")
        container = factory()
        survivors = 0
        for value in self._evaluate():
            survivors += 1
            accumulator(container, value)
        self._log_evaluation("collect", survivors)
        return container

    def _evaluate(self) -> Iterator[T]:
        # Snapshot stages so callbacks cannot change the pipeline mid-evaluation.
        predicates = [stage.predicate for stage in self._filters]
        functions = [stage.function for stage in self._transforms]
        for item in self._source:
            if not all(predicate(item) for predicate in predicates):
                continue
            value = item
            for function in functions:
                value = function(value)
            yield value

    def _log_evaluation(self, operation: str, survivors: int) -> None:
        logger.debug(
            "Pipeline evaluated",
            operation=operation,
            filters=len(self._filters),
            transforms=len(self._transforms),
            survivors=survivors,
        )

    def __repr__(self) -> str:
        return (
            f"LazyPipeline(source={type(self._source).__name__}, "
            f"filters={len(self._filters)}, transforms={len(self._transforms)})"
        )
