from __future__ import annotations

from thumbparams.filters import ImageFilter, Pipeline, filter_name
from tests.helpers.filters import RecordingFilter


def test_pipeline_applies_filters_in_order() -> None:
    pipeline = Pipeline([RecordingFilter("a"), RecordingFilter("b")]).add(RecordingFilter("c"))

    assert pipeline.apply([]) == ["a", "b", "c"]
    assert len(pipeline) == 3


def test_pipeline_add_first_and_add_all() -> None:
    pipeline = Pipeline().add_all([RecordingFilter("b"), RecordingFilter("c")])
    pipeline.add_first(RecordingFilter("a"))

    assert pipeline.apply(["src"]) == ["src", "a", "b", "c"]


def test_pipeline_is_itself_a_filter() -> None:
    inner = Pipeline([RecordingFilter("inner")])
    outer = Pipeline([inner, RecordingFilter("outer")])

    assert isinstance(inner, ImageFilter)
    assert outer.apply([]) == ["inner", "outer"]


def test_pipeline_filters_view_is_immutable_copy() -> None:
    first = RecordingFilter("a")
    pipeline = Pipeline([first])

    view = pipeline.filters
    pipeline.add(RecordingFilter("b"))

    assert view == (first,)


def test_empty_pipeline_returns_input() -> None:
    image = object()
    assert Pipeline().apply(image) is image


def test_filter_name_falls_back_to_type_name() -> None:
    assert filter_name(RecordingFilter("border")) == "border"
    assert filter_name(Pipeline()) == "Pipeline"
    assert repr(Pipeline([RecordingFilter("x")])) == "Pipeline([x])"
