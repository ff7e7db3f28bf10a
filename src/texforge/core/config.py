"""Configuration model used by the document builder.

BuilderConfig

`legacy_latex_accents` (`bool`)
: When `True`, escape accented characters, ligatures, and typographic punctuation
  using legacy LaTeX macros. When `False`, keep Unicode glyphs compatible with
  LuaLaTeX/XeLaTeX (default).

`indent` (`int`)
: Number of spaces used to indent environment bodies for each nesting level.
  `0` keeps every construct flush left (default).

`debug` (`bool`)
: Forwarded to the diagnostic emitter so verbose events are surfaced.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BuilderConfig(BaseModel):
    """Rendering options shared by every builder of a document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    legacy_latex_accents: bool = False
    indent: int = Field(default=0, ge=0, description="Spaces per environment depth")
    debug: bool = False


def coerce_config(config: BuilderConfig | Mapping[str, Any] | None) -> BuilderConfig:
    """Return a validated configuration from a model, a mapping or ``None``."""
    if config is None:
        return BuilderConfig()
    if isinstance(config, BuilderConfig):
        return config
    if isinstance(config, Mapping):
        return BuilderConfig.model_validate(dict(config))
    raise TypeError(f"Unsupported builder configuration: {type(config).__name__}")


__all__ = ["BuilderConfig", "coerce_config"]
