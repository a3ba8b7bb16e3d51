import itertools
import operator

import pytest

from core.domain.pipeline import (
    Filter,
    GeneratedSource,
    LazyPipeline,
    PipelineStageError,
    SequenceSource,
    Transform,
)


def to_list(pipeline: LazyPipeline) -> list:
    return pipeline.collect(list, list.append)


class TestSources:
    def test_of_literals(self) -> None:
        assert to_list(LazyPipeline.of(1, 2, 3)) == [1, 2, 3]

    def test_of_single_sequence_is_one_element(self) -> None:
        assert to_list(LazyPipeline.of([1, 2])) == [[1, 2]]

    def test_from_sequence_snapshots_values(self) -> None:
        values = [1, 2, 3]
        pipeline = LazyPipeline.from_sequence(values)
        values.append(4)
        assert to_list(pipeline) == [1, 2, 3]
        assert isinstance(pipeline.source, SequenceSource)

    def test_from_sequence_makes_generators_restartable(self) -> None:
        pipeline = LazyPipeline.from_sequence(x for x in range(3))
        assert to_list(pipeline) == [0, 1, 2]
        assert to_list(pipeline) == [0, 1, 2]

    def test_from_sequence_requires_iterable(self) -> None:
        with pytest.raises(TypeError):
            LazyPipeline.from_sequence(None)  # type: ignore[arg-type]

    def test_one_shot_iterator_source_is_restartable(self) -> None:
        pipeline = LazyPipeline(iter([1, 2, 3]))
        assert isinstance(pipeline.source, SequenceSource)
        assert pipeline.reduce(operator.add) == 6
        assert pipeline.reduce(operator.add) == 6

    def test_generator_source_is_restartable(self) -> None:
        pipeline = LazyPipeline(x * 2 for x in range(3))
        assert to_list(pipeline) == [0, 2, 4]
        assert to_list(pipeline) == [0, 2, 4]

    def test_restartable_source_kept_as_is(self) -> None:
        source = GeneratedSource(1, lambda x: x + 1, lambda x: x < 3)
        assert LazyPipeline(source).source is source

    def test_iterate_restarts_from_seed(self) -> None:
        pipeline = LazyPipeline.iterate(1, lambda x: x + 1, lambda x: x < 5)
        assert isinstance(pipeline.source, GeneratedSource)
        assert to_list(pipeline) == [1, 2, 3, 4]
        assert to_list(pipeline) == [1, 2, 3, 4]

    def test_iterate_can_be_empty(self) -> None:
        pipeline = LazyPipeline.iterate(10, lambda x: x + 1, lambda x: x < 5)
        assert to_list(pipeline) == []

    def test_infinite_source_is_lazy(self) -> None:
        source = GeneratedSource(0, lambda x: x + 1, lambda x: True)
        assert list(itertools.islice(source, 5)) == [0, 1, 2, 3, 4]

    def test_iterate_requires_callables(self) -> None:
        with pytest.raises(PipelineStageError):
            LazyPipeline.iterate(0, None, lambda x: True)  # type: ignore[arg-type]

    def test_non_iterable_source_rejected(self) -> None:
        with pytest.raises(TypeError):
            LazyPipeline(42)  # type: ignore[arg-type]


class TestStageRegistration:
    def test_map_and_filter_return_same_pipeline(self) -> None:
        pipeline = LazyPipeline.of(1, 2)
        assert pipeline.map(lambda x: x) is pipeline
        assert pipeline.filter(lambda x: True) is pipeline
        assert pipeline.function(lambda x: x) is pipeline
        assert len(pipeline.transforms) == 2
        assert len(pipeline.filters) == 1
        assert all(isinstance(stage, Transform) for stage in pipeline.transforms)
        assert all(isinstance(stage, Filter) for stage in pipeline.filters)

    def test_registration_does_not_evaluate(self) -> None:
        calls = []
        pipeline = LazyPipeline.of(1, 2, 3)
        pipeline.map(lambda x: calls.append(x) or x).filter(lambda x: calls.append(x) or True)
        assert calls == []

    @pytest.mark.parametrize("method", ["map", "function", "filter"])
    def test_non_callable_stage_rejected(self, method: str) -> None:
        pipeline = LazyPipeline.of(1)
        with pytest.raises(PipelineStageError):
            getattr(pipeline, method)(None)
        assert pipeline.filters == ()
        assert pipeline.transforms == ()


class TestReduce:
    def test_filter_then_sum(self) -> None:
        assert LazyPipeline.of(1, -2, 3, 4).filter(lambda x: x > 0).reduce(operator.add) == 8

    def test_map_then_sum(self) -> None:
        assert LazyPipeline.of(1, 2, 3).map(lambda x: x * 2).reduce(operator.add) == 12

    def test_generated_sum(self) -> None:
        pipeline = LazyPipeline.iterate(1, lambda x: x + 1, lambda x: x < 5)
        assert pipeline.reduce(operator.add) == 10

    def test_empty_source(self) -> None:
        assert LazyPipeline.of().reduce(operator.add) is None

    def test_nothing_survives(self) -> None:
        assert LazyPipeline.of(1, 2).filter(lambda x: x > 5).reduce(operator.add) is None

    def test_fold_to_none_matches_empty_result(self) -> None:
        assert LazyPipeline.of(1, 2).reduce(lambda acc, x: None) is None

    def test_single_survivor_is_not_folded(self) -> None:
        def fail(a: int, b: int) -> int:
            raise AssertionError("op must not be called")

        assert LazyPipeline.of(7).reduce(fail) == 7

    def test_fold_order_is_left_to_right(self) -> None:
        assert LazyPipeline.of("a", "b", "c").reduce(lambda acc, x: f"({acc}{x})") == "((ab)c)"

    def test_terminal_calls_can_repeat(self) -> None:
        pipeline = LazyPipeline.of(1, 2, 3).map(lambda x: x + 1)
        assert pipeline.reduce(operator.add) == 9
        assert pipeline.reduce(operator.add) == 9


class TestCollect:
    def test_filter_to_list(self) -> None:
        assert to_list(LazyPipeline.of(1, 2, 3).filter(lambda x: x != 2)) == [1, 3]

    def test_empty_to_list(self) -> None:
        assert to_list(LazyPipeline.of()) == []

    def test_factory_called_once_per_terminal_call(self) -> None:
        created = []

        def factory() -> list:
            created.append(1)
            return []

        pipeline = LazyPipeline.of(1, 2, 3)
        pipeline.collect(factory, list.append)
        assert created == [1]

    def test_custom_container(self) -> None:
        result = LazyPipeline.of("a", "bb", "a").collect(dict, lambda d, s: d.update({s: len(s)}))
        assert result == {"a": 1, "bb": 2}


class TestStageOrdering:
    def test_filters_see_original_elements(self) -> None:
        # The filter is registered after the map but still sees 1, 2, 3.
        pipeline = LazyPipeline.of(1, 2, 3).map(lambda x: x * 10).filter(lambda x: x < 3)
        assert to_list(pipeline) == [10, 20]

    def test_transforms_apply_in_registration_order(self) -> None:
        pipeline = LazyPipeline.of(1, 2).map(lambda x: x + 1).map(lambda x: x * 3)
        assert to_list(pipeline) == [6, 9]

    def test_filters_short_circuit(self) -> None:
        seen = []

        def second(x: int) -> bool:
            seen.append(x)
            return True

        pipeline = LazyPipeline.of(1, 2, 3, 4).filter(lambda x: x % 2 == 0).filter(second)
        assert to_list(pipeline) == [2, 4]
        assert seen == [2, 4]

    def test_transforms_skipped_for_rejected_elements(self) -> None:
        mapped = []
        pipeline = LazyPipeline.of(1, 2, 3).filter(lambda x: x != 2).map(
            lambda x: mapped.append(x) or x
        )
        to_list(pipeline)
        assert mapped == [1, 3]

    def test_stages_registered_during_evaluation_are_ignored(self) -> None:
        pipeline = LazyPipeline.of(1, 2, 3)

        def register(x: int) -> int:
            pipeline.map(lambda y: y * 100)
            return x

        pipeline.map(register)
        assert to_list(pipeline) == [1, 2, 3]
        assert len(pipeline.transforms) == 4

    def test_stage_errors_propagate(self) -> None:
        pipeline = LazyPipeline.of(1, 0).map(lambda x: 1 // x)
        with pytest.raises(ZeroDivisionError):
            pipeline.reduce(operator.add)
