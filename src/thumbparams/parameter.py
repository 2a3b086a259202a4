"""Immutable thumbnail parameter record handed to the resizing pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Optional, Tuple, Union

from thumbparams.datatypes import DEFAULT_FORMAT_TYPE, ORIGINAL_FORMAT, ImageType, SizingMode
from thumbparams.filters import ImageFilter, filter_name

if TYPE_CHECKING:
    from thumbparams.geometry import Region
    from thumbparams.resizers import Resizer

__all__ = ["ScaleSizing", "SizeSizing", "Sizing", "ThumbnailParameter"]


@dataclass(frozen=True)
class ScaleSizing:
    """Resize by a multiplicative factor applied to both axes."""

    factor: float
    mode: ClassVar[SizingMode] = SizingMode.SCALE

    def to_dict(self) -> Dict[str, Any]:
        return {"mode": self.mode.value, "factor": self.factor}


@dataclass(frozen=True)
class SizeSizing:
    """Resize to explicit target dimensions."""

    width: int
    height: int
    mode: ClassVar[SizingMode] = SizingMode.SIZE

    def to_dict(self) -> Dict[str, Any]:
        return {"mode": self.mode.value, "width": self.width, "height": self.height}


Sizing = Union[ScaleSizing, SizeSizing]


def _json_number(value: float) -> Union[float, str]:
    # JSON has no NaN or Infinity literals.
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


@dataclass(frozen=True)
class ThumbnailParameter:
    """
    Fully resolved description of how to produce a thumbnail.

    Attributes:
        sizing (Sizing): Exactly one of ``ScaleSizing`` or ``SizeSizing``.
        region (Region | None): Source subarea to resize, ``None`` for the whole image.
        keep_aspect_ratio (bool): Whether the source aspect ratio is preserved.
        output_format (str): Encoder format name, or ``ORIGINAL_FORMAT``.
        output_format_type (str): Encoder subtype, or ``DEFAULT_FORMAT_TYPE``.
        quality (float): Compression quality, conventionally 0.0-1.0.
        image_type (int): Pixel format code of the thumbnail.
        filters (tuple[ImageFilter, ...]): Filters applied after resizing, in order.
        resizer (Resizer): Strategy that performs the resize.
    """

    sizing: Sizing
    region: Optional["Region"]
    keep_aspect_ratio: bool
    output_format: str
    output_format_type: str
    quality: float
    image_type: int
    filters: Tuple[ImageFilter, ...]
    resizer: "Resizer"

    @property
    def mode(self) -> SizingMode:
        return self.sizing.mode

    @property
    def uses_original_format(self) -> bool:
        return self.output_format == ORIGINAL_FORMAT

    @property
    def uses_default_format_type(self) -> bool:
        return self.output_format_type == DEFAULT_FORMAT_TYPE

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready mapping; filters and the resizer are named, not serialized."""

        try:
            image_type_label: Optional[str] = ImageType(self.image_type).name
        except ValueError:
            image_type_label = None
        return {
            "sizing": self.sizing.to_dict(),
            "region": self.region.describe() if self.region is not None else None,
            "keep_aspect_ratio": self.keep_aspect_ratio,
            "output_format": self.output_format,
            "output_format_type": self.output_format_type,
            "quality": _json_number(self.quality),
            "image_type": self.image_type,
            "image_type_name": image_type_label,
            "filters": [filter_name(item) for item in self.filters],
            "resizer": getattr(self.resizer, "name", type(self.resizer).__name__),
        }
