"""Click CLI wiring and entry points for thumbparams."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler

from thumbparams.builder import ThumbnailParameterBuilder
from thumbparams.config_loader import ConfigError, apply_thumbnail_config, load_config
from thumbparams.datatypes import AppConfig
from thumbparams.errors import GeometryError, ThumbnailParameterError
from thumbparams.geometry import (
    AbsoluteSize,
    Coordinate,
    Region,
    compute_output_dimensions,
    format_dimensions,
    normalise_position,
)
from thumbparams.layout_utils import color_text, format_kv, format_steps
from thumbparams.parameter import ScaleSizing, ThumbnailParameter
from thumbparams.resizers import available_resizers, resolve_resizer

logger = logging.getLogger(__name__)

_DIMENSIONS_RE = re.compile(r"^\s*(\d+)\s*[xX×]\s*(\d+)\s*$")


def _parse_dimensions(raw: str, option: str) -> Tuple[int, int]:
    match = _DIMENSIONS_RE.match(raw)
    if match is None:
        raise click.BadParameter(f"expected WIDTHxHEIGHT, got {raw!r}", param_hint=option)
    return int(match.group(1)), int(match.group(2))


def _parse_region(raw: str) -> Region:
    """Parse ``X,Y,W,H`` or ``ANCHOR:WxH`` into a Region."""

    try:
        if ":" in raw:
            anchor, _, extent = raw.partition(":")
            width, height = _parse_dimensions(extent, "--region")
            return Region(normalise_position(anchor), AbsoluteSize(width, height))
        parts = [int(part) for part in raw.split(",")]
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--region") from exc
    except GeometryError as exc:
        raise click.BadParameter(str(exc), param_hint="--region") from exc
    if len(parts) != 4:
        raise click.BadParameter("expected X,Y,W,H or ANCHOR:WxH", param_hint="--region")
    x, y, width, height = parts
    try:
        return Region(Coordinate(x, y), AbsoluteSize(width, height))
    except GeometryError as exc:
        raise click.BadParameter(str(exc), param_hint="--region") from exc


def _configure_logging(verbose: bool, no_color: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_path=False,
        markup=False,
    )
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


def _build_from_options(
    app_config: Optional[AppConfig],
    *,
    size: Optional[str],
    scale: Optional[float],
    region: Optional[str],
    keep_aspect_ratio: Optional[bool],
    quality: Optional[float],
    output_format: Optional[str],
    format_type: Optional[str],
    pixel_format: Optional[int],
    resizer_name: Optional[str],
) -> ThumbnailParameter:
    """Apply config values, then command-line overrides, and finalize."""

    if app_config is not None:
        try:
            builder = apply_thumbnail_config(app_config.thumbnail)
        except ConfigError as exc:
            raise click.ClickException(str(exc)) from exc
    else:
        builder = ThumbnailParameterBuilder()

    try:
        if size is not None:
            builder.set_dimensions(_parse_dimensions(size, "--size"))
        if scale is not None:
            builder.set_scale(scale)
        if region is not None:
            builder.set_region(_parse_region(region))
        if keep_aspect_ratio is not None:
            builder.set_keep_aspect_ratio(keep_aspect_ratio)
        if quality is not None:
            builder.set_quality(quality)
        if output_format is not None:
            builder.set_format(output_format)
        if format_type is not None:
            builder.set_format_type(format_type)
        if pixel_format is not None:
            builder.set_pixel_format(pixel_format)
        if resizer_name is not None:
            try:
                builder.set_resizer(resolve_resizer(resizer_name))
            except KeyError as exc:
                raise click.BadParameter(exc.args[0], param_hint="--resizer") from exc
        return builder.finalize()
    except ThumbnailParameterError as exc:
        raise click.ClickException(str(exc)) from exc


def _plan_payload(parameter: ThumbnailParameter, source: Tuple[int, int]) -> Dict[str, Any]:
    try:
        output = compute_output_dimensions(parameter, *source)
        if parameter.region is not None:
            rect = parameter.region.calculate(*source)
            resize_from = (rect.width, rect.height)
        else:
            resize_from = source
    except GeometryError as exc:
        raise click.ClickException(str(exc)) from exc
    steps = parameter.resizer.plan_steps(resize_from, output)
    return {
        "source": list(source),
        "output": list(output),
        "steps": [list(step) for step in steps],
    }


def _render_parameter(
    console: Console,
    parameter: ThumbnailParameter,
    plan: Optional[Dict[str, Any]],
) -> None:
    sizing = parameter.sizing
    if isinstance(sizing, ScaleSizing):
        sizing_text = format_kv("scale", f"{sizing.factor:g}")
    else:
        sizing_text = format_kv("size", format_dimensions(sizing.width, sizing.height))
    payload = parameter.to_dict()
    console.print(color_text("Thumbnail parameters", "bold"))
    console.print(f"  {format_kv('mode', parameter.mode.value)}  {sizing_text}")
    console.print(f"  {format_kv('region', payload['region'] or 'whole image')}")
    console.print(f"  {format_kv('keep_aspect_ratio', parameter.keep_aspect_ratio)}")
    image_type = payload["image_type_name"] or parameter.image_type
    console.print(f"  {format_kv('pixel_format', image_type)}  {format_kv('quality', parameter.quality)}")
    console.print(
        f"  {format_kv('format', parameter.output_format)}  "
        f"{format_kv('format_type', parameter.output_format_type)}"
    )
    filters = ", ".join(payload["filters"]) or "none"
    console.print(f"  {format_kv('filters', filters)}  {format_kv('resizer', payload['resizer'])}")
    if plan is not None:
        source_w, source_h = plan["source"]
        output_w, output_h = plan["output"]
        console.print(
            f"  {format_kv('source', format_dimensions(source_w, source_h))}  "
            f"{format_kv('output', format_dimensions(output_w, output_h), value_style='green')}"
        )
        steps = [(int(step[0]), int(step[1])) for step in plan["steps"]]
        console.print(f"  {format_kv('passes', format_steps(steps))}")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="TOML file with [thumbnail] and [cli] tables. Command-line options override it.",
)
@click.option("--size", default=None, help="Target dimensions as WIDTHxHEIGHT.")
@click.option("--scale", type=float, default=None, help="Scaling factor; takes precedence over --size.")
@click.option("--region", default=None, help="Source region as X,Y,W,H or ANCHOR:WxH (e.g. center:640x360).")
@click.option(
    "--keep-aspect-ratio/--no-keep-aspect-ratio",
    "keep_aspect_ratio",
    default=None,
    help="Preserve the source aspect ratio when sizing by dimensions.",
)
@click.option("--quality", type=float, default=None, help="Output compression quality (conventionally 0.0-1.0).")
@click.option("--format", "output_format", default=None, help="Output format name, or 'original'.")
@click.option("--format-type", default=None, help="Output format subtype, or 'default'.")
@click.option("--pixel-format", type=int, default=None, help="Pixel format code of the thumbnail.")
@click.option(
    "--resizer",
    "resizer_name",
    type=click.Choice(available_resizers(), case_sensitive=False),
    default=None,
    help="Resizing strategy.",
)
@click.option("--source", default=None, help="Source image size WIDTHxHEIGHT; reports the resulting thumbnail size.")
@click.option("--json", "as_json", is_flag=True, help="Emit the resolved parameters as JSON.")
@click.option("--json-pretty", is_flag=True, help="Pretty-print the JSON output.")
@click.option("--verbose", is_flag=True, help="Show debug logging.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colour output.")
def main(
    config_path: Optional[str],
    size: Optional[str],
    scale: Optional[float],
    region: Optional[str],
    keep_aspect_ratio: Optional[bool],
    quality: Optional[float],
    output_format: Optional[str],
    format_type: Optional[str],
    pixel_format: Optional[int],
    resizer_name: Optional[str],
    source: Optional[str],
    as_json: bool,
    json_pretty: bool,
    verbose: bool,
    no_color: bool,
) -> None:
    """Resolve thumbnail parameters and print the resulting record."""

    app_config: Optional[AppConfig] = None
    if config_path is not None:
        try:
            app_config = load_config(config_path)
        except ConfigError as exc:
            raise click.ClickException(f"Config error: {exc}") from exc
        json_pretty = json_pretty or app_config.cli.json_pretty
        verbose = verbose or app_config.cli.verbose
        no_color = no_color or app_config.cli.no_color

    _configure_logging(verbose, no_color)
    source_dims = _parse_dimensions(source, "--source") if source is not None else None

    parameter = _build_from_options(
        app_config,
        size=size,
        scale=scale,
        region=region,
        keep_aspect_ratio=keep_aspect_ratio,
        quality=quality,
        output_format=output_format,
        format_type=format_type,
        pixel_format=pixel_format,
        resizer_name=resizer_name,
    )
    plan = _plan_payload(parameter, source_dims) if source_dims is not None else None

    if as_json or json_pretty:
        payload = parameter.to_dict()
        if plan is not None:
            payload["plan"] = plan
        click.echo(json.dumps(payload, indent=2 if json_pretty else None))
        return

    console = Console(no_color=no_color, highlight=False)
    _render_parameter(console, parameter, plan)


cli = main

__all__ = ["cli", "main"]
