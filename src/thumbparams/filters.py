"""Post-resize filter capabilities."""

from __future__ import annotations

from typing import Any, Iterable, List, Protocol, Sequence, runtime_checkable

__all__ = ["ImageFilter", "Pipeline", "filter_name"]


@runtime_checkable
class ImageFilter(Protocol):
    """A transformation applied to the resized image."""

    def apply(self, image: Any) -> Any:
        ...


def filter_name(image_filter: object) -> str:
    """Return a display label for ``image_filter``."""

    name = getattr(image_filter, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(image_filter).__name__


class Pipeline:
    """Ordered composite that applies each filter to the previous one's output."""

    def __init__(self, filters: Iterable[ImageFilter] = ()) -> None:
        self._filters: List[ImageFilter] = list(filters)

    @property
    def filters(self) -> Sequence[ImageFilter]:
        return tuple(self._filters)

    def add(self, image_filter: ImageFilter) -> "Pipeline":
        self._filters.append(image_filter)
        return self

    def add_first(self, image_filter: ImageFilter) -> "Pipeline":
        self._filters.insert(0, image_filter)
        return self

    def add_all(self, filters: Iterable[ImageFilter]) -> "Pipeline":
        self._filters.extend(filters)
        return self

    def apply(self, image: Any) -> Any:
        current = image
        for image_filter in self._filters:
            current = image_filter.apply(current)
        return current

    def __len__(self) -> int:
        return len(self._filters)

    def __repr__(self) -> str:
        names = ", ".join(filter_name(item) for item in self._filters)
        return f"Pipeline([{names}])"
