"""Custom exception hierarchy for the LaTeX document builder."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .builder import BuilderState


class LatexBuildError(RuntimeError):
    """Base exception for document assembly failures."""


class StateError(LatexBuildError):
    """Raised when an operation is not valid for the current builder state."""

    def __init__(self, operation: str, state: BuilderState, reason: str | None = None) -> None:
        self.operation = operation
        self.state = state
        message = f"'{operation}' is not allowed in the {state.value} state"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class StructureError(LatexBuildError):
    """Raised when environments are not balanced."""

    def __init__(self, message: str, open_environments: Sequence[str] = ()) -> None:
        self.open_environments = tuple(open_environments)
        if self.open_environments:
            message = f"{message} ({', '.join(self.open_environments)})"
        super().__init__(message)


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


__all__ = [
    "LatexBuildError",
    "StateError",
    "StructureError",
    "exception_messages",
]
