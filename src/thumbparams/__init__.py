"""Validated, immutable thumbnail parameters built through a fluent builder."""

from thumbparams.builder import (
    BuildFailure,
    BuildResult,
    BuildSuccess,
    ParameterDraft,
    ThumbnailParameterBuilder,
    resolve_parameters,
)
from thumbparams.datatypes import (
    DEFAULT_FORMAT_TYPE,
    DEFAULT_IMAGE_TYPE,
    DEFAULT_QUALITY,
    ORIGINAL_FORMAT,
    ImageType,
    SizingMode,
)
from thumbparams.errors import (
    GeometryError,
    ParameterArgumentError,
    ParameterReferenceError,
    ParameterStateError,
    ThumbnailParameterError,
)
from thumbparams.filters import ImageFilter, Pipeline
from thumbparams.geometry import AbsoluteSize, Coordinate, Positions, Region, RelativeSize
from thumbparams.parameter import ScaleSizing, SizeSizing, ThumbnailParameter
from thumbparams.resizers import Resizer, Resizers

__version__ = "0.1.0"

__all__ = [
    "AbsoluteSize",
    "BuildFailure",
    "BuildResult",
    "BuildSuccess",
    "Coordinate",
    "DEFAULT_FORMAT_TYPE",
    "DEFAULT_IMAGE_TYPE",
    "DEFAULT_QUALITY",
    "GeometryError",
    "ImageFilter",
    "ImageType",
    "ORIGINAL_FORMAT",
    "ParameterArgumentError",
    "ParameterDraft",
    "ParameterReferenceError",
    "ParameterStateError",
    "Pipeline",
    "Positions",
    "Region",
    "RelativeSize",
    "Resizer",
    "Resizers",
    "ScaleSizing",
    "SizeSizing",
    "SizingMode",
    "ThumbnailParameter",
    "ThumbnailParameterBuilder",
    "ThumbnailParameterError",
    "__version__",
    "resolve_parameters",
]
