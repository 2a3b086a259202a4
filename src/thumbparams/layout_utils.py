"""Shared Rich/text formatting helpers for CLI output."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from rich.markup import escape

from thumbparams.geometry import format_dimensions


def color_text(text: str, style: Optional[str]) -> str:
    """Wrap *text* with Rich ``style`` tags when provided."""

    if style:
        return f"[{style}]{text}[/]"
    return text


def format_kv(
    label: str,
    value: object,
    *,
    label_style: Optional[str] = "dim",
    value_style: Optional[str] = "bright_white",
    sep: str = "=",
) -> str:
    """Format a label/value pair with optional Rich styling."""

    label_text = escape(str(label))
    value_text = escape(str(value))
    return f"{color_text(label_text, label_style)}{sep}{color_text(value_text, value_style)}"


def format_steps(steps: Iterable[Tuple[int, int]]) -> str:
    """Join resize passes as ``w × h -> w × h``; empty plans read as a plain copy."""

    rendered = [format_dimensions(width, height) for width, height in steps]
    if not rendered:
        return "copy"
    return " -> ".join(rendered)
