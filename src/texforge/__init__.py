"""Primary public API for texforge."""

from __future__ import annotations

from texforge.adapters.latex.utils import escape_latex_chars
from texforge.core.builder import BuilderState, Content, ContentBuilder, DocumentBuilder
from texforge.core.config import BuilderConfig
from texforge.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from texforge.core.exceptions import LatexBuildError, StateError, StructureError
from texforge.core.models import (
    ArrayParams,
    ColorModel,
    DocumentClass,
    DocumentClassOption,
    Environment,
    EnvironmentKind,
    EnvironmentParams,
    FigureParams,
    FileContentsOption,
    FileContentsParams,
    ListParams,
    MinipageParams,
    PictureParams,
    TableParams,
    TabularParams,
    TheBibliographyParams,
)
from texforge.core.nodes import (
    ContentNode,
    Literal,
    Raw,
    SectionLevel,
    TextStyle,
    TitleField,
    render_node,
    render_nodes,
)
from texforge.core.options import options
from texforge.version import get_version


__version__ = get_version()

__all__ = [
    "ArrayParams",
    "BuilderConfig",
    "BuilderState",
    "ColorModel",
    "Content",
    "ContentBuilder",
    "ContentNode",
    "DiagnosticEmitter",
    "DocumentBuilder",
    "DocumentClass",
    "DocumentClassOption",
    "Environment",
    "EnvironmentKind",
    "EnvironmentParams",
    "FigureParams",
    "FileContentsOption",
    "FileContentsParams",
    "LatexBuildError",
    "ListParams",
    "Literal",
    "LoggingEmitter",
    "MinipageParams",
    "NullEmitter",
    "PictureParams",
    "Raw",
    "SectionLevel",
    "StateError",
    "StructureError",
    "TableParams",
    "TabularParams",
    "TextStyle",
    "TheBibliographyParams",
    "TitleField",
    "__version__",
    "escape_latex_chars",
    "get_version",
    "options",
    "render_node",
    "render_nodes",
]
