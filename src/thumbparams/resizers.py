"""Resizer capabilities and the built-in resizing strategies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Protocol, Tuple, runtime_checkable

__all__ = [
    "Interpolation",
    "InterpolationResizer",
    "Resizer",
    "Resizers",
    "available_resizers",
    "resolve_resizer",
    "select_resizer",
]

logger = logging.getLogger(__name__)

Dimensions = Tuple[int, int]


class Interpolation(str, Enum):
    """Resampling kernels a downstream renderer can apply."""

    NEAREST_NEIGHBOR = "nearest_neighbor"
    BILINEAR = "bilinear"
    BICUBIC = "bicubic"


@runtime_checkable
class Resizer(Protocol):
    """
    Pluggable resizing strategy.

    Implementations describe how a resize should run; the pixel work itself
    belongs to the rendering backend that consumes the plan.
    """

    name: str

    def plan_steps(self, source: Dimensions, target: Dimensions) -> List[Dimensions]:
        """Return the intermediate and final sizes the resize passes through."""
        ...


@dataclass(frozen=True)
class InterpolationResizer:
    """
    Resizer backed by a single interpolation kernel.

    Attributes:
        name (str): Registry name used by configs and the CLI.
        interpolation (Interpolation | None): Kernel used per pass, ``None`` for a plain copy.
        progressive (bool): Whether large reductions halve the image in several passes.
    """

    name: str
    interpolation: Interpolation | None
    progressive: bool = False

    def plan_steps(self, source: Dimensions, target: Dimensions) -> List[Dimensions]:
        src_w, src_h = source
        dst_w, dst_h = target
        if self.interpolation is None:
            return []
        if not self.progressive or (dst_w * 2 >= src_w and dst_h * 2 >= src_h):
            return [(dst_w, dst_h)]

        steps: List[Dimensions] = []
        width, height = src_w, src_h
        while (width, height) != (dst_w, dst_h):
            width = max(width // 2, dst_w)
            height = max(height // 2, dst_h)
            steps.append((width, height))
        return steps


class Resizers:
    """Namespace of the built-in resizer strategies."""

    NULL = InterpolationResizer("null", None)
    NEAREST = InterpolationResizer("nearest", Interpolation.NEAREST_NEIGHBOR)
    BILINEAR = InterpolationResizer("bilinear", Interpolation.BILINEAR)
    BICUBIC = InterpolationResizer("bicubic", Interpolation.BICUBIC)
    PROGRESSIVE = InterpolationResizer("progressive", Interpolation.BILINEAR, progressive=True)


_REGISTRY: Dict[str, InterpolationResizer] = {
    resizer.name: resizer
    for resizer in (
        Resizers.NULL,
        Resizers.NEAREST,
        Resizers.BILINEAR,
        Resizers.BICUBIC,
        Resizers.PROGRESSIVE,
    )
}


def available_resizers() -> Tuple[str, ...]:
    """Return the registered resizer names in a stable order."""

    return tuple(sorted(_REGISTRY))


def resolve_resizer(name: str) -> InterpolationResizer:
    """
    Look up a built-in resizer by name, case-insensitively.

    Raises:
        KeyError: If ``name`` does not match a registered resizer.
    """

    normalized = str(name).strip().lower()
    try:
        return _REGISTRY[normalized]
    except KeyError:
        raise KeyError(
            f"Unknown resizer {name!r}; expected one of: {', '.join(available_resizers())}"
        ) from None


def select_resizer(source: Dimensions, target: Dimensions) -> InterpolationResizer:
    """
    Pick a built-in resizer suited to the given resize.

    Equal sizes need no resampling, enlargements use bicubic, reductions past
    half size go progressive, and the remaining reductions use bilinear.
    """

    src_w, src_h = source
    dst_w, dst_h = target
    if (src_w, src_h) == (dst_w, dst_h):
        chosen = Resizers.NULL
    elif dst_w > src_w or dst_h > src_h:
        chosen = Resizers.BICUBIC
    elif src_w > dst_w * 2 or src_h > dst_h * 2:
        chosen = Resizers.PROGRESSIVE
    else:
        chosen = Resizers.BILINEAR
    logger.debug("Selected %s resizer for %sx%s -> %sx%s", chosen.name, src_w, src_h, dst_w, dst_h)
    return chosen
