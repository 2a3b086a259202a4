"""Configuration loader that parses and validates user-provided TOML."""

from __future__ import annotations

import logging
import math
import tomllib
from dataclasses import fields
from enum import Enum
from typing import Any, Dict, Optional

from thumbparams.builder import ThumbnailParameterBuilder
from thumbparams.datatypes import AppConfig, CLIConfig, RegionConfig, ResizerName, ThumbnailConfig
from thumbparams.errors import GeometryError, ThumbnailParameterError
from thumbparams.geometry import AbsoluteSize, Coordinate, Region, RelativeSize, normalise_position
from thumbparams.resizers import resolve_resizer

__all__ = ["ConfigError", "apply_thumbnail_config", "build_region", "load_config", "parse_config"]

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when the configuration file is malformed or fails validation."""


def _coerce_bool(value: Any, dotted_key: str) -> bool:
    """Return a bool, coercing simple 0/1 representations when necessary."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"0", "1"}:
            return normalized == "1"
        if normalized in {"true", "false"}:
            return normalized == "true"
    raise ConfigError(f"{dotted_key} must be a boolean (use true/false).")


def _coerce_enum(value: Any, dotted_key: str, enum_type: type[Enum]) -> Enum:
    """Return an enum member, coercing string values case-insensitively."""

    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        for member in enum_type:
            member_value = str(member.value).lower()
            if normalized == member_value:
                return member
    raise ConfigError(
        f"{dotted_key} must be one of: {', '.join(str(member.value) for member in enum_type)}"
    )


def _normalize_float(value: Any, dotted_key: str) -> float:
    """Return ``value`` as a finite float, raising ConfigError otherwise."""

    if isinstance(value, bool):
        raise ConfigError(f"{dotted_key} must be a number")
    try:
        numeric = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{dotted_key} must be a number") from exc
    if not math.isfinite(numeric):
        raise ConfigError(f"{dotted_key} must be a finite number")
    return numeric


def _normalize_number(value: Any, dotted_key: str) -> float:
    """Return ``value`` as a float without any finiteness or range check."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{dotted_key} must be a number")
    try:
        return float(value)
    except OverflowError as exc:
        raise ConfigError(f"{dotted_key} is too large") from exc


def _normalize_int(value: Any, dotted_key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{dotted_key} must be an integer")
    return value


def _sanitize_section(raw: Any, name: str, cls):
    """
    Coerce a raw TOML table into an instance of ``cls`` with cleaned booleans.

    Parameters:
        raw (Any): Raw TOML section data.
        name (str): Section name used when reporting validation errors.
        cls: Dataclass type used to construct the section object.

    Returns:
        Any: Instantiated dataclass populated with values from ``raw``.

    Raises:
        ConfigError: If the section is not a table or contains invalid keys or values.
    """
    if not isinstance(raw, dict):
        raise ConfigError(f"[{name}] must be a table")
    cleaned: Dict[str, Any] = {}
    cls_fields = {field.name: field for field in fields(cls) if not field.name.startswith("_")}
    bool_fields = {field_name for field_name, field in cls_fields.items() if field.type is bool}
    enum_fields = {
        field_name: field.type
        for field_name, field in cls_fields.items()
        if isinstance(field.type, type) and issubclass(field.type, Enum)
    }
    for key, value in raw.items():
        if key not in cls_fields:
            raise ConfigError(f"Invalid keys in [{name}]: unexpected key {key!r}")
        if key in bool_fields:
            cleaned[key] = _coerce_bool(value, f"{name}.{key}")
        elif key in enum_fields:
            cleaned[key] = _coerce_enum(value, f"{name}.{key}", enum_fields[key])
        else:
            cleaned[key] = value
    try:
        instance = cls(**cleaned)
    except TypeError as exc:
        raise ConfigError(f"Invalid keys in [{name}]: {exc}") from exc
    if hasattr(instance, "_provided_keys"):
        instance._provided_keys = set(raw.keys())
    return instance


def _validate_region(region: RegionConfig) -> None:
    if region.position is not None and not isinstance(region.position, str):
        raise ConfigError("thumbnail.region.position must be a string")
    if region.position is not None and (region.x is not None or region.y is not None):
        raise ConfigError("thumbnail.region.position cannot be combined with x/y")
    if region.x is not None:
        region.x = _normalize_int(region.x, "thumbnail.region.x")
    if region.y is not None:
        region.y = _normalize_int(region.y, "thumbnail.region.y")
    if region.scale is not None:
        if region.width is not None or region.height is not None:
            raise ConfigError("thumbnail.region.scale cannot be combined with width/height")
        region.scale = _normalize_float(region.scale, "thumbnail.region.scale")
        return
    if region.width is None or region.height is None:
        raise ConfigError("thumbnail.region requires width and height, or scale")
    region.width = _normalize_int(region.width, "thumbnail.region.width")
    region.height = _normalize_int(region.height, "thumbnail.region.height")


def _validate_thumbnail(thumb: ThumbnailConfig) -> None:
    """Type-check the thumbnail table; range checks are left to the builder."""

    if thumb.width is not None:
        thumb.width = _normalize_int(thumb.width, "thumbnail.width")
    if thumb.height is not None:
        thumb.height = _normalize_int(thumb.height, "thumbnail.height")
    if (thumb.width is None) != (thumb.height is None):
        raise ConfigError("thumbnail.width and thumbnail.height must be set together")
    if thumb.scale is not None:
        thumb.scale = _normalize_float(thumb.scale, "thumbnail.scale")
    thumb.pixel_format = _normalize_int(thumb.pixel_format, "thumbnail.pixel_format")
    # Quality is passed through unchecked, non-finite values included.
    thumb.quality = _normalize_number(thumb.quality, "thumbnail.quality")
    for key in ("format", "format_type"):
        if not isinstance(getattr(thumb, key), str):
            raise ConfigError(f"thumbnail.{key} must be a string")
    if thumb.region is not None:
        _validate_region(thumb.region)


def parse_config(raw: Dict[str, Any]) -> AppConfig:
    """Validate already-decoded TOML data and return an AppConfig."""

    unknown = sorted(set(raw) - {"thumbnail", "cli"})
    if unknown:
        raise ConfigError(f"Unknown configuration sections: {', '.join(unknown)}")

    thumbnail_section = raw.get("thumbnail", {})
    region_section: Optional[Any] = None
    if isinstance(thumbnail_section, dict) and "region" in thumbnail_section:
        thumbnail_section = dict(thumbnail_section)
        region_section = thumbnail_section.pop("region")

    app = AppConfig(
        thumbnail=_sanitize_section(thumbnail_section, "thumbnail", ThumbnailConfig),
        cli=_sanitize_section(raw.get("cli", {}), "cli", CLIConfig),
    )
    if region_section is not None:
        app.thumbnail.region = _sanitize_section(region_section, "thumbnail.region", RegionConfig)
        app.thumbnail._provided_keys.add("region")
    _validate_thumbnail(app.thumbnail)
    return app


def load_config(path: str) -> AppConfig:
    """
    Load and validate an application configuration from a TOML file.

    Reads the file at `path`, parses it as UTF-8 TOML (BOM is accepted), and
    coerces the ``[thumbnail]`` and ``[cli]`` tables into their dataclasses.

    Returns:
        AppConfig: The validated configuration.

    Raises:
        ConfigError: If the file is not UTF-8, TOML parsing fails, or any validation rule is violated.
    """

    with open(path, "rb") as handle:
        raw_bytes = handle.read()
    if raw_bytes.startswith(b"\xef\xbb\xbf"):
        raw_bytes = raw_bytes[3:]
    try:
        raw = tomllib.loads(raw_bytes.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise ConfigError("Configuration file must be UTF-8 encoded") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse TOML: {exc}") from exc
    logger.debug("Loaded configuration from %s", path)
    return parse_config(raw)


def build_region(region: RegionConfig) -> Region:
    """Translate a region table into a geometry Region."""

    try:
        if region.position is not None:
            position = normalise_position(region.position)
        else:
            position = Coordinate(region.x or 0, region.y or 0)
        if region.scale is not None:
            size = RelativeSize(region.scale)
        else:
            size = AbsoluteSize(int(region.width or 0), int(region.height or 0))
    except GeometryError as exc:
        raise ConfigError(f"thumbnail.region: {exc}") from exc
    return Region(position, size)


def apply_thumbnail_config(
    thumb: ThumbnailConfig,
    builder: ThumbnailParameterBuilder | None = None,
) -> ThumbnailParameterBuilder:
    """
    Apply a ``[thumbnail]`` table to ``builder`` (a fresh one when omitted).

    Raises:
        ConfigError: If a value is rejected by the builder or names an unknown resizer.
    """

    target = builder if builder is not None else ThumbnailParameterBuilder()
    try:
        resizer = resolve_resizer(ResizerName(thumb.resizer).value)
    except (KeyError, ValueError) as exc:
        raise ConfigError(f"thumbnail.resizer: unknown resizer {thumb.resizer!r}") from exc

    target.set_pixel_format(thumb.pixel_format)
    target.set_keep_aspect_ratio(thumb.keep_aspect_ratio)
    target.set_quality(thumb.quality)
    target.set_format(thumb.format)
    target.set_format_type(thumb.format_type)
    target.set_resizer(resizer)
    if thumb.region is not None:
        target.set_region(build_region(thumb.region))
    try:
        if thumb.width is not None and thumb.height is not None:
            target.set_size(thumb.width, thumb.height)
        if thumb.scale is not None:
            target.set_scale(thumb.scale)
    except ThumbnailParameterError as exc:
        raise ConfigError(f"thumbnail: {exc}") from exc
    return target
