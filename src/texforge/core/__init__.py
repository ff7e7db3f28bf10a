"""Content model and builders for LaTeX documents."""

from __future__ import annotations

from .builder import BuilderState, Content, ContentBuilder, DocumentBuilder
from .config import BuilderConfig
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .exceptions import LatexBuildError, StateError, StructureError
from .nodes import ContentNode, render_node, render_nodes


__all__ = [
    "BuilderConfig",
    "BuilderState",
    "Content",
    "ContentBuilder",
    "ContentNode",
    "DiagnosticEmitter",
    "DocumentBuilder",
    "LatexBuildError",
    "LoggingEmitter",
    "NullEmitter",
    "StateError",
    "StructureError",
    "render_node",
    "render_nodes",
]
