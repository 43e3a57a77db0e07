import logging

import pytest

from featbin.context import NUM_BINS, DiscretizationContext
from featbin.discretize import equal_frequency_pipeline, equal_width_pipeline
from featbin.exceptions import (
    AttributeNotDiscretizableError,
    InvalidArgumentError,
    StepExecutionError,
)
from featbin.labels import assign_bin, bin_bounds, bin_label, interval_labels
from featbin.pipeline import Pipeline
from featbin.steps import collect_numeric_values, set_parameters


def _labels(result, attribute="x"):
    return [row.attributes[attribute] for row in result.discretized_rows]


def test_assign_bin_is_left_closed() -> None:
    cuts = [3.0, 7.5]
    assert assign_bin(2.99, cuts) == 0
    assert assign_bin(3.0, cuts) == 1
    assert assign_bin(7.49, cuts) == 1
    assert assign_bin(7.5, cuts) == 2
    assert bin_label(3.0, cuts) == "[3.00, 7.50)"
    assert bin_label(-100.0, cuts) == "(-inf, 3.00)"
    assert bin_label(10.0, cuts) == "[7.50, +inf)"
    assert bin_label(5.0, []) == "(-inf, +inf)"
    assert bin_label(1.0, [0.24], precision=1) == "[0.2, +inf)"
    assert interval_labels([5.5]) == ["(-inf, 5.50)", "[5.50, +inf)"]


@pytest.mark.parametrize("attribute", ["", "   ", None])
def test_discretize_rejects_blank_attribute(ten_rows, attribute) -> None:
    with pytest.raises(InvalidArgumentError):
        equal_width_pipeline().discretize(ten_rows, attribute)


def test_discretize_rejects_missing_dataset() -> None:
    with pytest.raises(ValueError):
        equal_width_pipeline().discretize(None, "x")


def test_pipeline_rejects_non_callable_step() -> None:
    with pytest.raises(InvalidArgumentError):
        Pipeline("broken", [collect_numeric_values, 42])


def test_equal_width_two_bins_labels_rows(ten_rows) -> None:
    result = equal_width_pipeline(n_bins=2).discretize(ten_rows, "x")

    assert result.final_cut_points == [5.5]
    assert result.original_numeric_values == [float(i) for i in range(1, 11)]
    assert result.discretized_attribute_name == "x"
    assert result.error is None and not result.is_passthrough
    assert _labels(result) == ["(-inf, 5.50)"] * 5 + ["[5.50, +inf)"] * 5
    assert [r.attributes["name"] for r in result.discretized_rows] == [f"row{i}" for i in range(1, 11)]
    assert [r.target for r in result.discretized_rows] == ["lo"] * 5 + ["hi"] * 5
    # source rows untouched
    assert [r.attributes["x"] for r in ten_rows.rows] == list(range(1, 11))
    assert result.bin_labels == ["(-inf, 5.50)", "[5.50, +inf)"]
    assert result.n_bins == 2


def test_equal_frequency_two_bins(ten_rows) -> None:
    result = equal_frequency_pipeline(n_bins=2).discretize(ten_rows, "x")
    assert result.final_cut_points == [5.5]


@pytest.mark.parametrize("factory", [equal_width_pipeline, equal_frequency_pipeline])
def test_constant_attribute_is_single_bin(constant_rows, factory) -> None:
    result = factory().discretize(constant_rows, "x")
    assert result.final_cut_points == []
    assert result.error is None
    assert set(_labels(result)) == {"(-inf, +inf)"}


def test_unknown_attribute_passes_through(ten_rows) -> None:
    result = equal_width_pipeline().discretize(ten_rows, "missing")
    assert isinstance(result.error, AttributeNotDiscretizableError)
    assert result.is_passthrough
    assert result.final_cut_points == []
    assert result.discretized_rows == ten_rows.rows
    assert result.discretized_rows[0] is not ten_rows.rows[0]


def test_text_attribute_passes_through(ten_rows) -> None:
    result = equal_width_pipeline().discretize(ten_rows, "name")
    assert isinstance(result.error, AttributeNotDiscretizableError)
    assert _labels(result, "name") == [f"row{i}" for i in range(1, 11)]


def test_numeric_attribute_without_values_passes_through(ten_rows) -> None:
    pipeline = Pipeline("no collection", [set_parameters(numBins=3)])
    result = pipeline.discretize(ten_rows, "x")
    assert isinstance(result.error, AttributeNotDiscretizableError)
    assert result.final_cut_points == []
    assert _labels(result) == list(range(1, 11))


def test_failing_step_aborts_and_passes_through(ten_rows, caplog) -> None:
    calls = []

    def explode(context: DiscretizationContext) -> DiscretizationContext:
        raise RuntimeError("boom")

    def never(context: DiscretizationContext) -> DiscretizationContext:
        calls.append(context)
        return context

    pipeline = Pipeline("failing", [collect_numeric_values, explode, never])
    with caplog.at_level(logging.WARNING, logger="featbin.pipeline"):
        result = pipeline.discretize(ten_rows, "x")

    assert calls == []
    assert isinstance(result.error, StepExecutionError)
    assert result.error.step_name == "explode"
    assert isinstance(result.error.cause, RuntimeError)
    assert result.final_cut_points == []
    assert _labels(result) == list(range(1, 11))
    assert "explode" in caplog.text


def test_step_returning_none_is_a_failure(ten_rows) -> None:
    pipeline = Pipeline("lossy", [collect_numeric_values, lambda context: None])
    result = pipeline.discretize(ten_rows, "x")
    assert isinstance(result.error, StepExecutionError)
    assert result.error.cause is None


def test_step_returning_wrong_type_is_a_failure(ten_rows) -> None:
    pipeline = Pipeline("dict", [collect_numeric_values, lambda context: {"cut_points": []}])
    result = pipeline.discretize(ten_rows, "x")
    assert isinstance(result.error, StepExecutionError)
    assert isinstance(result.error.cause, TypeError)
    assert _labels(result) == list(range(1, 11))


def test_step_leaving_unusable_cut_points_is_a_failure(ten_rows) -> None:
    def garble(context: DiscretizationContext) -> DiscretizationContext:
        context.cut_points = ["abc"]
        return context

    result = Pipeline("garbled", [collect_numeric_values, garble]).discretize(ten_rows, "x")
    assert isinstance(result.error, StepExecutionError)
    assert result.error.step_name == "garble"
    assert isinstance(result.error.cause, ValueError)
    assert result.final_cut_points == []


def test_uncoercible_values_are_kept(mixed_rows) -> None:
    result = equal_width_pipeline(n_bins=2).discretize(mixed_rows, "x")
    assert result.original_numeric_values == [1.0, 2.5, 4.0, 6.0]
    assert result.final_cut_points == [3.5]
    assert _labels(result) == [
        "(-inf, 3.50)",
        "(-inf, 3.50)",
        "n/a",
        "[3.50, +inf)",
        None,
        "[3.50, +inf)",
    ]


def test_initial_parameters_are_copied(ten_rows) -> None:
    params = {NUM_BINS: 2}
    seen = []

    def mutate(context: DiscretizationContext) -> DiscretizationContext:
        context.parameters["scratch"] = 1.5
        seen.append(dict(context.parameters))
        return context

    Pipeline("copy", [collect_numeric_values, mutate]).discretize(ten_rows, "x", params)
    assert params == {NUM_BINS: 2}
    assert seen == [{NUM_BINS: 2, "scratch": 1.5}]


def test_cut_points_are_normalised_after_each_step(ten_rows) -> None:
    def unsorted(context: DiscretizationContext) -> DiscretizationContext:
        context.cut_points = [3.0, 1.0, 3.0, float("nan")]
        return context

    result = Pipeline("raw", [collect_numeric_values, unsorted]).discretize(ten_rows, "x")
    assert result.final_cut_points == [1.0, 3.0]


def test_explicit_parameter_beats_later_default(ten_rows) -> None:
    result = equal_width_pipeline().discretize(ten_rows, "x", {NUM_BINS: 3})
    assert result.final_cut_points == pytest.approx([4.0, 7.0])


def test_labels_contain_their_values_and_are_deterministic(ten_rows) -> None:
    pipeline = equal_frequency_pipeline(n_bins=3)
    first = pipeline.discretize(ten_rows, "x")
    second = pipeline.discretize(ten_rows, "x")

    assert first.final_cut_points == second.final_cut_points == [3.5, 6.5]
    assert _labels(first) == _labels(second)
    cuts = first.final_cut_points
    for value in first.original_numeric_values:
        lower, upper = bin_bounds(assign_bin(value, cuts), cuts)
        assert lower <= value < upper


def test_result_to_polars(ten_rows) -> None:
    df = equal_width_pipeline(n_bins=2).discretize(ten_rows, "x").to_polars()
    assert df.columns == ["x", "name", "label"]
    assert df.get_column("x").to_list()[0] == "(-inf, 5.50)"
    assert df.get_column("label").to_list()[-1] == "hi"
