"""Fluent builder that validates and resolves thumbnail parameters."""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple, Union

from thumbparams.datatypes import (
    DEFAULT_FORMAT_TYPE,
    DEFAULT_IMAGE_TYPE,
    DEFAULT_QUALITY,
    ORIGINAL_FORMAT,
)
from thumbparams.errors import (
    ParameterArgumentError,
    ParameterReferenceError,
    ParameterStateError,
    ThumbnailParameterError,
)
from thumbparams.filters import ImageFilter
from thumbparams.parameter import ScaleSizing, SizeSizing, Sizing, ThumbnailParameter
from thumbparams.resizers import Resizers

if TYPE_CHECKING:
    from thumbparams.geometry import Region
    from thumbparams.resizers import Resizer

__all__ = [
    "BuildFailure",
    "BuildResult",
    "BuildSuccess",
    "ParameterDraft",
    "ThumbnailParameterBuilder",
    "resolve_parameters",
]

logger = logging.getLogger(__name__)


@dataclass
class ParameterDraft:
    """
    Mutable builder state. ``None`` marks sizing fields that were never set.

    The remaining fields start from the record defaults: ARGB pixels, kept
    aspect ratio, the original output format with its codec-default subtype,
    no filters, and the progressive resizer over the whole image.
    """

    width: Optional[int] = None
    height: Optional[int] = None
    scale: Optional[float] = None
    image_type: int = DEFAULT_IMAGE_TYPE
    keep_aspect_ratio: bool = True
    quality: float = DEFAULT_QUALITY
    output_format: str = ORIGINAL_FORMAT
    output_format_type: str = DEFAULT_FORMAT_TYPE
    filters: List[ImageFilter] = field(default_factory=list)
    resizer: "Resizer" = Resizers.PROGRESSIVE
    region: Optional["Region"] = None


@dataclass(frozen=True)
class BuildSuccess:
    parameter: ThumbnailParameter
    ok: bool = True


@dataclass(frozen=True)
class BuildFailure:
    error: ThumbnailParameterError
    ok: bool = False


BuildResult = Union[BuildSuccess, BuildFailure]


def _resolve_sizing(draft: ParameterDraft) -> Optional[Sizing]:
    # A configured scale wins over an explicit size regardless of call order.
    if draft.scale is not None:
        return ScaleSizing(draft.scale)
    if draft.width is not None and draft.height is not None:
        return SizeSizing(draft.width, draft.height)
    return None


def resolve_parameters(draft: ParameterDraft) -> BuildResult:
    """
    Resolve ``draft`` into a parameter record without raising.

    Returns:
        BuildResult: ``BuildSuccess`` carrying the record, or ``BuildFailure``
        carrying a ``ParameterStateError`` when no sizing strategy is set.
    """

    sizing = _resolve_sizing(draft)
    if sizing is None:
        return BuildFailure(
            ParameterStateError("Neither the size nor the scaling factor has been set.")
        )
    parameter = ThumbnailParameter(
        sizing=sizing,
        region=draft.region,
        keep_aspect_ratio=draft.keep_aspect_ratio,
        output_format=draft.output_format,
        output_format_type=draft.output_format_type,
        quality=draft.quality,
        image_type=draft.image_type,
        filters=tuple(draft.filters),
        resizer=draft.resizer,
    )
    logger.debug("Resolved thumbnail parameters: %s", sizing)
    return BuildSuccess(parameter)


class ThumbnailParameterBuilder:
    """
    Collects thumbnail settings and produces ``ThumbnailParameter`` records.

    Every setter returns the builder so calls can be chained. Setters may be
    called in any order and any number of times. A builder holds plain mutable
    state and must not be shared across threads.
    """

    def __init__(self) -> None:
        self._draft = ParameterDraft()

    @property
    def draft(self) -> ParameterDraft:
        """Return a copy of the current draft state."""

        return dataclasses.replace(self._draft, filters=list(self._draft.filters))

    def set_pixel_format(self, code: int) -> "ThumbnailParameterBuilder":
        self._draft.image_type = code
        return self

    def set_size(self, width: int, height: int) -> "ThumbnailParameterBuilder":
        """
        Set the target dimensions.

        Raises:
            ParameterArgumentError: If ``width`` or ``height`` is negative. Neither
                value is stored in that case.
        """

        if width < 0:
            logger.debug("Rejected thumbnail width %s", width)
            raise ParameterArgumentError("Width must be greater than or equal to 0.")
        if height < 0:
            logger.debug("Rejected thumbnail height %s", height)
            raise ParameterArgumentError("Height must be greater than or equal to 0.")
        self._draft.width = width
        self._draft.height = height
        return self

    def set_dimensions(self, size: Tuple[int, int]) -> "ThumbnailParameterBuilder":
        width, height = size
        return self.set_size(width, height)

    def set_scale(self, factor: float) -> "ThumbnailParameterBuilder":
        """
        Set the scaling factor. A configured scale always takes precedence over a size.

        Raises:
            ParameterArgumentError: If ``factor`` is not a finite number greater than 0.
        """

        try:
            numeric = float(factor)
        except OverflowError as exc:
            logger.debug("Rejected out-of-range scaling factor %s", factor)
            raise ParameterArgumentError("Scaling factor must be a finite number.") from exc
        if math.isnan(numeric) or math.isinf(numeric):
            logger.debug("Rejected non-finite scaling factor %s", factor)
            raise ParameterArgumentError("Scaling factor must be a finite number.")
        if numeric <= 0.0:
            logger.debug("Rejected scaling factor %s", factor)
            raise ParameterArgumentError("Scaling factor is less than or equal to 0.")
        self._draft.scale = numeric
        return self

    def set_region(self, region: Optional["Region"]) -> "ThumbnailParameterBuilder":
        self._draft.region = region
        return self

    def set_keep_aspect_ratio(self, keep: bool) -> "ThumbnailParameterBuilder":
        self._draft.keep_aspect_ratio = keep
        return self

    def set_quality(self, quality: float) -> "ThumbnailParameterBuilder":
        """Set the compression quality. Values outside 0.0-1.0 are passed through as-is."""

        self._draft.quality = quality
        return self

    def set_format(self, name: str) -> "ThumbnailParameterBuilder":
        self._draft.output_format = name
        return self

    def set_format_type(self, name: str) -> "ThumbnailParameterBuilder":
        self._draft.output_format_type = name
        return self

    def set_filters(self, filters: Sequence[ImageFilter]) -> "ThumbnailParameterBuilder":
        """
        Replace the filter sequence. Filters run after resizing, in the given order.

        Raises:
            ParameterReferenceError: If ``filters`` is ``None``.
        """

        if filters is None:
            raise ParameterReferenceError("Filters is None.")
        self._draft.filters = list(filters)
        return self

    def set_resizer(self, resizer: "Resizer") -> "ThumbnailParameterBuilder":
        """
        Replace the resizing strategy.

        Raises:
            ParameterReferenceError: If ``resizer`` is ``None``.
        """

        if resizer is None:
            raise ParameterReferenceError("Resizer is None.")
        self._draft.resizer = resizer
        return self

    def finalize(self) -> ThumbnailParameter:
        """
        Return a record built from the current settings.

        The draft is left untouched, so ``finalize`` may be called again after
        further setter calls.

        Raises:
            ParameterStateError: If neither a size nor a scaling factor has been set.
        """

        result = resolve_parameters(self._draft)
        if isinstance(result, BuildFailure):
            raise result.error
        return result.parameter

    build = finalize
