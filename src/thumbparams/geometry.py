"""Source-region geometry and output dimension planning."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol, Tuple, runtime_checkable

from thumbparams.datatypes import SizingMode
from thumbparams.errors import GeometryError

if TYPE_CHECKING:
    from thumbparams.parameter import ThumbnailParameter

__all__ = [
    "AbsoluteSize",
    "Coordinate",
    "Position",
    "Positions",
    "Rectangle",
    "Region",
    "RelativeSize",
    "Size",
    "compute_output_dimensions",
    "format_dimensions",
    "normalise_position",
]


def format_dimensions(width: int, height: int) -> str:
    """Return width × height using integer values."""

    return f"{int(width)} × {int(height)}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@runtime_checkable
class Position(Protocol):
    """Anything that can place an object inside an enclosing area."""

    def calculate(
        self,
        enclosing_width: int,
        enclosing_height: int,
        width: int,
        height: int,
    ) -> Tuple[int, int]:
        ...


@runtime_checkable
class Size(Protocol):
    """Anything that can derive a size from the enclosing image size."""

    def calculate(self, width: int, height: int) -> Tuple[int, int]:
        ...


class Positions(str, Enum):
    """Anchored placements inside the enclosing image."""

    TOP_LEFT = "top_left"
    TOP_CENTER = "top_center"
    TOP_RIGHT = "top_right"
    CENTER_LEFT = "center_left"
    CENTER = "center"
    CENTER_RIGHT = "center_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_CENTER = "bottom_center"
    BOTTOM_RIGHT = "bottom_right"

    def calculate(
        self,
        enclosing_width: int,
        enclosing_height: int,
        width: int,
        height: int,
    ) -> Tuple[int, int]:
        vertical, _, horizontal = self.value.partition("_")
        horizontal = horizontal or "center"

        if horizontal == "left":
            x = 0
        elif horizontal == "right":
            x = enclosing_width - width
        else:
            x = enclosing_width // 2 - width // 2

        if vertical == "top":
            y = 0
        elif vertical == "bottom":
            y = enclosing_height - height
        else:
            y = enclosing_height // 2 - height // 2
        return (x, y)


def normalise_position(value: "Position | str") -> Position:
    """Return a Position, resolving anchor names case-insensitively."""

    if isinstance(value, Positions):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower().replace("-", "_")
        try:
            return Positions(normalized)
        except ValueError as exc:
            choices = ", ".join(member.value for member in Positions)
            raise GeometryError(f"Unknown position {value!r}; expected one of: {choices}") from exc
    return value


@dataclass(frozen=True)
class Coordinate:
    """Absolute top-left placement, ignoring the object size."""

    x: int
    y: int

    def calculate(
        self,
        enclosing_width: int,
        enclosing_height: int,
        width: int,
        height: int,
    ) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class AbsoluteSize:
    """A fixed width and height."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise GeometryError("Region width and height must be >= 0")

    def calculate(self, width: int, height: int) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class RelativeSize:
    """A fraction of the enclosing image, between 0.0 and 1.0."""

    factor: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.factor) or not 0.0 <= self.factor <= 1.0:
            raise GeometryError("Relative size factor must be between 0.0 and 1.0")

    def calculate(self, width: int, height: int) -> Tuple[int, int]:
        return (_round_half_up(width * self.factor), _round_half_up(height * self.factor))


@dataclass(frozen=True)
class Rectangle:
    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def intersection(self, other: "Rectangle") -> "Rectangle":
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.x + self.width, other.x + other.width)
        bottom = min(self.y + self.height, other.y + other.height)
        return Rectangle(left, top, max(0, right - left), max(0, bottom - top))


@dataclass(frozen=True)
class Region:
    """
    Rectangular subarea of a source image used as the resize input.

    Attributes:
        position (Position): Where the region is placed in the source image.
        size (Size): How large the region is, absolute or relative.
    """

    position: Position
    size: Size

    def calculate(self, width: int, height: int) -> Rectangle:
        """
        Resolve the region against a source image of ``width`` by ``height``.

        The placed rectangle is clipped to the image bounds.

        Raises:
            GeometryError: If the image is empty or the region lies wholly outside it.
        """

        if width <= 0 or height <= 0:
            raise GeometryError("Source image dimensions must be positive")
        region_w, region_h = self.size.calculate(width, height)
        x, y = self.position.calculate(width, height, region_w, region_h)
        clipped = Rectangle(x, y, region_w, region_h).intersection(Rectangle(0, 0, width, height))
        if clipped.is_empty:
            raise GeometryError(
                f"Region {format_dimensions(region_w, region_h)} at ({x}, {y}) "
                f"lies outside the {format_dimensions(width, height)} image"
            )
        return clipped

    def describe(self) -> str:
        position = self.position
        if isinstance(position, Positions):
            anchor = position.value
        elif isinstance(position, Coordinate):
            anchor = f"({position.x}, {position.y})"
        else:
            anchor = type(position).__name__
        size = self.size
        if isinstance(size, AbsoluteSize):
            extent = format_dimensions(size.width, size.height)
        elif isinstance(size, RelativeSize):
            extent = f"{size.factor:g}x"
        else:
            extent = type(size).__name__
        return f"{extent} @ {anchor}"


def compute_output_dimensions(
    parameter: "ThumbnailParameter",
    source_width: int,
    source_height: int,
) -> Tuple[int, int]:
    """
    Return the thumbnail size implied by ``parameter`` for a source image.

    When a region is configured the region's clipped size replaces the source
    size. By-size records honour ``keep_aspect_ratio`` by shrinking whichever
    axis overshoots the source ratio.

    Raises:
        GeometryError: If the source is empty or the result would have a zero axis.
    """

    if source_width <= 0 or source_height <= 0:
        raise GeometryError("Source image dimensions must be positive")
    if parameter.region is not None:
        rect = parameter.region.calculate(source_width, source_height)
        source_width, source_height = rect.width, rect.height

    sizing = parameter.sizing
    if sizing.mode is SizingMode.SCALE:
        dest_w = _round_half_up(source_width * sizing.factor)
        dest_h = _round_half_up(source_height * sizing.factor)
    else:
        dest_w, dest_h = sizing.width, sizing.height
        if parameter.keep_aspect_ratio and dest_w > 0 and dest_h > 0:
            source_ratio = source_width / source_height
            target_ratio = dest_w / dest_h
            if source_ratio > target_ratio:
                dest_h = _round_half_up(dest_w / source_ratio)
            elif source_ratio < target_ratio:
                dest_w = _round_half_up(dest_h * source_ratio)

    if dest_w <= 0 or dest_h <= 0:
        raise GeometryError(
            f"Resulting thumbnail would be {format_dimensions(dest_w, dest_h)}"
        )
    return (dest_w, dest_h)
