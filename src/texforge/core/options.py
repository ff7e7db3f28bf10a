"""Normalisation of class and package options into bracket syntax."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias

from .models import enum_text


Options: TypeAlias = Iterable[Any] | Mapping[str, Any] | None


def normalise_options(options: Options) -> tuple[str, ...]:
    """Return the option entries in insertion order.

    Sequences are kept verbatim, duplicates included. Mappings produce
    ``key=value`` entries: ``True`` keeps the bare key while ``False`` and
    ``None`` drop the entry.
    """
    if options is None:
        return ()
    if isinstance(options, str):
        raise TypeError("Options must be a sequence or a mapping, not a bare string.")
    if isinstance(options, Mapping):
        entries: list[str] = []
        for key, value in options.items():
            if value is None or value is False:
                continue
            if value is True:
                entries.append(str(key))
            else:
                entries.append(f"{key}={enum_text(value)}")
        return tuple(entries)
    return tuple(enum_text(option) for option in options)


def format_options(options: Iterable[str]) -> str:
    """Render ``[a,b]`` or nothing at all when there are no options."""
    entries = list(options)
    if not entries:
        return ""
    return f"[{','.join(entries)}]"


def options(*items: Any) -> tuple[str, ...]:
    """Collect heterogeneous option values, e.g. ``options(DocumentClassOption.A4PAPER, "12pt")``."""
    return normalise_options(items)


__all__ = ["Options", "format_options", "normalise_options", "options"]
