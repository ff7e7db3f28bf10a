"""LaTeX text helpers."""

from __future__ import annotations

from .utils import RESERVED_CHARACTERS, escape_latex_chars


__all__ = ["RESERVED_CHARACTERS", "escape_latex_chars"]
