"""Constants, enums, and configuration dataclasses for thumbnail parameters."""
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Final, Optional, Set


class ImageType(IntEnum):
    """Pixel format codes understood by the downstream encoder."""

    CUSTOM = 0
    INT_RGB = 1
    INT_ARGB = 2
    INT_ARGB_PRE = 3
    INT_BGR = 4
    THREE_BYTE_BGR = 5
    FOUR_BYTE_ABGR = 6
    FOUR_BYTE_ABGR_PRE = 7
    USHORT_565_RGB = 8
    USHORT_555_RGB = 9
    BYTE_GRAY = 10
    USHORT_GRAY = 11
    BYTE_BINARY = 12
    BYTE_INDEXED = 13


class SizingMode(str, Enum):
    """Discriminator for the two mutually exclusive sizing strategies."""

    SCALE = "scale"
    SIZE = "size"


class ResizerName(str, Enum):
    """Names of the built-in resizers accepted by configs."""

    NULL = "null"
    NEAREST = "nearest"
    BILINEAR = "bilinear"
    BICUBIC = "bicubic"
    PROGRESSIVE = "progressive"


DEFAULT_IMAGE_TYPE: Final[int] = int(ImageType.INT_ARGB)
DEFAULT_QUALITY: Final[float] = 0.75
ORIGINAL_FORMAT: Final[str] = "original"
DEFAULT_FORMAT_TYPE: Final[str] = "default"


@dataclass
class RegionConfig:
    """Source region declared in ``[thumbnail.region]``."""

    position: Optional[str] = None
    x: Optional[int] = None
    y: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    scale: Optional[float] = None


@dataclass
class ThumbnailConfig:
    """Builder inputs declared in the ``[thumbnail]`` table."""

    width: Optional[int] = None
    height: Optional[int] = None
    scale: Optional[float] = None
    pixel_format: int = DEFAULT_IMAGE_TYPE
    keep_aspect_ratio: bool = True
    quality: float = DEFAULT_QUALITY
    format: str = ORIGINAL_FORMAT
    format_type: str = DEFAULT_FORMAT_TYPE
    resizer: ResizerName = ResizerName.PROGRESSIVE
    region: Optional[RegionConfig] = None
    _provided_keys: Set[str] = field(default_factory=set)


@dataclass
class CLIConfig:
    """Presentation preferences for the command-line front end."""

    json_pretty: bool = False
    verbose: bool = False
    no_color: bool = False


@dataclass
class AppConfig:
    """Top-level configuration loaded from TOML."""

    thumbnail: ThumbnailConfig = field(default_factory=ThumbnailConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)
