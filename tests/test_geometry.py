from __future__ import annotations

import pytest

from thumbparams.builder import ThumbnailParameterBuilder
from thumbparams.errors import GeometryError
from thumbparams.geometry import (
    AbsoluteSize,
    Coordinate,
    Positions,
    Rectangle,
    Region,
    RelativeSize,
    compute_output_dimensions,
    format_dimensions,
    normalise_position,
)


def test_format_dimensions_uses_integers() -> None:
    assert format_dimensions(1920.0, 1080) == "1920 × 1080"  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("position", "expected"),
    [
        (Positions.TOP_LEFT, (0, 0)),
        (Positions.TOP_CENTER, (40, 0)),
        (Positions.TOP_RIGHT, (80, 0)),
        (Positions.CENTER_LEFT, (0, 30)),
        (Positions.CENTER, (40, 30)),
        (Positions.CENTER_RIGHT, (80, 30)),
        (Positions.BOTTOM_LEFT, (0, 60)),
        (Positions.BOTTOM_CENTER, (40, 60)),
        (Positions.BOTTOM_RIGHT, (80, 60)),
    ],
)
def test_anchored_positions(position: Positions, expected: tuple[int, int]) -> None:
    assert position.calculate(100, 80, 20, 20) == expected


def test_coordinate_ignores_object_size() -> None:
    assert Coordinate(7, 9).calculate(100, 100, 50, 50) == (7, 9)


@pytest.mark.parametrize("name", ["center", "CENTER", " bottom-right ", "top_left"])
def test_normalise_position_accepts_names(name: str) -> None:
    assert isinstance(normalise_position(name), Positions)


def test_normalise_position_rejects_unknown_name() -> None:
    with pytest.raises(GeometryError, match="Unknown position"):
        normalise_position("middle")


def test_normalise_position_passes_through_coordinates() -> None:
    coordinate = Coordinate(1, 2)
    assert normalise_position(coordinate) is coordinate


def test_absolute_size_rejects_negative_values() -> None:
    with pytest.raises(GeometryError):
        AbsoluteSize(-1, 5)


@pytest.mark.parametrize("factor", [-0.1, 1.5, float("nan")])
def test_relative_size_rejects_out_of_range(factor: float) -> None:
    with pytest.raises(GeometryError):
        RelativeSize(factor)


def test_relative_size_rounds_half_up() -> None:
    assert RelativeSize(0.5).calculate(101, 33) == (51, 17)


def test_rectangle_intersection_clips() -> None:
    clipped = Rectangle(-10, 5, 50, 50).intersection(Rectangle(0, 0, 30, 30))
    assert clipped == Rectangle(0, 5, 30, 25)


def test_region_clips_to_image_bounds() -> None:
    region = Region(Coordinate(90, 90), AbsoluteSize(50, 50))
    assert region.calculate(100, 100) == Rectangle(90, 90, 10, 10)


def test_region_centered_relative() -> None:
    region = Region(Positions.CENTER, RelativeSize(0.5))
    assert region.calculate(200, 100) == Rectangle(50, 25, 100, 50)


def test_region_outside_image_raises() -> None:
    region = Region(Coordinate(500, 500), AbsoluteSize(10, 10))
    with pytest.raises(GeometryError, match="lies outside"):
        region.calculate(100, 100)


def test_region_requires_positive_image() -> None:
    with pytest.raises(GeometryError):
        Region(Positions.CENTER, AbsoluteSize(1, 1)).calculate(0, 10)


def test_output_dimensions_for_scale() -> None:
    parameter = ThumbnailParameterBuilder().set_scale(0.25).finalize()
    assert compute_output_dimensions(parameter, 1920, 1080) == (480, 270)


def test_output_dimensions_keep_aspect_ratio_wide_source() -> None:
    parameter = ThumbnailParameterBuilder().set_size(200, 200).finalize()
    assert compute_output_dimensions(parameter, 1000, 500) == (200, 100)


def test_output_dimensions_keep_aspect_ratio_tall_source() -> None:
    parameter = ThumbnailParameterBuilder().set_size(200, 200).finalize()
    assert compute_output_dimensions(parameter, 500, 1000) == (100, 200)


def test_output_dimensions_without_aspect_ratio() -> None:
    parameter = ThumbnailParameterBuilder().set_size(200, 200).set_keep_aspect_ratio(False).finalize()
    assert compute_output_dimensions(parameter, 1920, 1080) == (200, 200)


def test_output_dimensions_use_region_size() -> None:
    parameter = (
        ThumbnailParameterBuilder()
        .set_scale(0.5)
        .set_region(Region(Positions.CENTER, AbsoluteSize(400, 300)))
        .finalize()
    )
    assert compute_output_dimensions(parameter, 1920, 1080) == (200, 150)


def test_output_dimensions_reject_zero_result() -> None:
    parameter = ThumbnailParameterBuilder().set_size(0, 0).finalize()
    with pytest.raises(GeometryError, match="Resulting thumbnail"):
        compute_output_dimensions(parameter, 640, 480)
