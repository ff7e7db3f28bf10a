"""Content nodes and their LaTeX serialisation rules.

Every construct the builders can emit is one of the frozen dataclasses below.
``render_node`` dispatches over the closed ``ContentNode`` union with a single
``match`` statement, so supporting a new construct means adding a variant and
its case in one place.

Nodes store raw user text. Escaping happens while rendering, which keeps the
traversal pure: the same node sequence always renders to the same string.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from texforge.adapters.latex.utils import escape_latex_chars

from .config import BuilderConfig
from .models import ColorModel, Environment, enum_text
from .options import format_options


class TextStyle(str, Enum):
    """Inline text styles mapped to their LaTeX command."""

    BOLD = "textbf"
    ITALIC = "textit"
    UNDERLINE = "underline"


class SectionLevel(str, Enum):
    """Sectioning commands from the coarsest to the finest level."""

    PART = "part"
    CHAPTER = "chapter"
    SECTION = "section"
    SUBSECTION = "subsection"
    SUBSUBSECTION = "subsubsection"
    PARAGRAPH = "paragraph"
    SUBPARAGRAPH = "subparagraph"


class TitleField(str, Enum):
    """Title metadata consumed by ``\\maketitle``."""

    TITLE = "title"
    AUTHOR = "author"
    DATE = "date"


class SpaceDirection(str, Enum):
    HORIZONTAL = "hspace"
    VERTICAL = "vspace"


class InclusionKind(str, Enum):
    INCLUDE = "include"
    INPUT = "input"


@dataclass(frozen=True, slots=True)
class Literal:
    """User text, escaped when rendered."""

    text: str


@dataclass(frozen=True, slots=True)
class Raw:
    """Markup emitted verbatim."""

    text: str


@dataclass(frozen=True, slots=True)
class Formatted:
    style: TextStyle
    body: tuple[ContentNode, ...]


@dataclass(frozen=True, slots=True)
class Sectioning:
    level: SectionLevel
    title: tuple[ContentNode, ...]
    numbered: bool = True


@dataclass(frozen=True, slots=True)
class EnvironmentNode:
    environment: Environment
    body: tuple[ContentNode, ...] = ()


@dataclass(frozen=True, slots=True)
class Label:
    identifier: str


@dataclass(frozen=True, slots=True)
class Reference:
    identifier: str


@dataclass(frozen=True, slots=True)
class TitleMeta:
    field: TitleField
    value: tuple[ContentNode, ...]


@dataclass(frozen=True, slots=True)
class RawCommand:
    """Arbitrary command; each argument is its own content sequence."""

    name: str
    args: tuple[tuple[ContentNode, ...], ...] = ()
    options: tuple[str, ...] = ()
    block: bool = False


@dataclass(frozen=True, slots=True)
class ClassDeclaration:
    name: str
    options: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PackageDeclaration:
    name: str
    options: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DocumentBoundary:
    opening: bool


@dataclass(frozen=True, slots=True)
class Footnote:
    body: tuple[ContentNode, ...]


@dataclass(frozen=True, slots=True)
class Citation:
    keys: tuple[str, ...]
    note: str | None = None


@dataclass(frozen=True, slots=True)
class TextColor:
    body: tuple[ContentNode, ...]
    color: str
    model: ColorModel | str | None = None


@dataclass(frozen=True, slots=True)
class Spacing:
    direction: SpaceDirection
    length: str


@dataclass(frozen=True, slots=True)
class FileInclusion:
    kind: InclusionKind
    filename: str


@dataclass(frozen=True, slots=True)
class Directive:
    """Argument-less command on a line of its own, e.g. ``\\maketitle``."""

    name: str


@dataclass(frozen=True, slots=True)
class LineBreak:
    pass


@dataclass(frozen=True, slots=True)
class Item:
    body: tuple[ContentNode, ...]
    label: tuple[ContentNode, ...] | None = None


ContentNode: TypeAlias = (
    Literal
    | Raw
    | Formatted
    | Sectioning
    | EnvironmentNode
    | Label
    | Reference
    | TitleMeta
    | RawCommand
    | ClassDeclaration
    | PackageDeclaration
    | DocumentBoundary
    | Footnote
    | Citation
    | TextColor
    | Spacing
    | FileInclusion
    | Directive
    | LineBreak
    | Item
)

# Bodies of these environments are character-exact; never re-indent them.
_VERBATIM_ENVIRONMENTS = frozenset({"verbatim", "filecontents"})

_DEFAULT_CONFIG = BuilderConfig()


def is_character_exact(environment: Environment) -> bool:
    """Return ``True`` when LaTeX reads the environment body verbatim."""
    return environment.name in _VERBATIM_ENVIRONMENTS


def is_block(node: ContentNode) -> bool:
    """Return ``True`` when the node occupies a line of its own."""
    match node:
        case (
            ClassDeclaration()
            | PackageDeclaration()
            | DocumentBoundary()
            | TitleMeta()
            | Sectioning()
            | EnvironmentNode()
            | Label()
            | Item()
            | Directive()
            | FileInclusion()
        ):
            return True
        case RawCommand(block=block):
            return block
        case _:
            return False


def _indent(text: str, width: int) -> str:
    """Indent every line except those inside nested verbatim bodies."""
    if not width:
        return text
    prefix = " " * width
    lines: list[str] = []
    exact_end: str | None = None
    for line in text.split("\n"):
        stripped = line.lstrip()
        if exact_end is not None:
            if not stripped.startswith(exact_end):
                lines.append(line)
                continue
            exact_end = None
        else:
            for name in _VERBATIM_ENVIRONMENTS:
                if stripped.startswith(f"\\begin{{{name}}}"):
                    exact_end = f"\\end{{{name}}}"
                    break
        lines.append(prefix + line if line else line)
    return "\n".join(lines)


def _render_environment(node: EnvironmentNode, config: BuilderConfig) -> str:
    lines = [node.environment.begin()]
    body = render_nodes(node.body, config)
    if body:
        if not is_character_exact(node.environment):
            body = _indent(body, config.indent)
        lines.append(body)
    lines.append(node.environment.end())
    return "\n".join(lines)


def _render_command(node: RawCommand, config: BuilderConfig) -> str:
    rendered = f"\\{node.name}{format_options(node.options)}"
    if node.args:
        return rendered + "".join(f"{{{render_nodes(arg, config)}}}" for arg in node.args)
    # A bare control word would swallow the letters of following inline text.
    return rendered if node.block else f"{rendered}{{}}"


def render_node(node: ContentNode, config: BuilderConfig | None = None) -> str:
    """Render a single node into LaTeX."""
    config = config or _DEFAULT_CONFIG
    match node:
        case Literal(text=text):
            return escape_latex_chars(text, legacy_accents=config.legacy_latex_accents)
        case Raw(text=text):
            return text
        case Formatted(style=style, body=body):
            return f"\\{style.value}{{{render_nodes(body, config)}}}"
        case Sectioning(level=level, title=title, numbered=numbered):
            star = "" if numbered else "*"
            return f"\\{level.value}{star}{{{render_nodes(title, config)}}}"
        case EnvironmentNode():
            return _render_environment(node, config)
        case Label(identifier=identifier):
            return f"\\label{{{identifier}}}"
        case Reference(identifier=identifier):
            return f"\\ref{{{identifier}}}"
        case TitleMeta(field=field, value=value):
            return f"\\{field.value}{{{render_nodes(value, config)}}}"
        case RawCommand():
            return _render_command(node, config)
        case ClassDeclaration(name=name, options=options):
            return f"\\documentclass{format_options(options)}{{{name}}}"
        case PackageDeclaration(name=name, options=options):
            return f"\\usepackage{format_options(options)}{{{name}}}"
        case DocumentBoundary(opening=opening):
            return "\\begin{document}" if opening else "\\end{document}"
        case Footnote(body=body):
            return f"\\footnote{{{render_nodes(body, config)}}}"
        case Citation(keys=keys, note=note):
            prefix = "" if note is None else f"[{note}]"
            return f"\\cite{prefix}{{{','.join(keys)}}}"
        case TextColor(body=body, color=color, model=model):
            prefix = "" if model is None else f"[{enum_text(model)}]"
            return f"\\textcolor{prefix}{{{color}}}{{{render_nodes(body, config)}}}"
        case Spacing(direction=direction, length=length):
            return f"\\{direction.value}{{{length}}}"
        case FileInclusion(kind=kind, filename=filename):
            return f"\\{kind.value}{{{filename}}}"
        case Directive(name=name):
            return f"\\{name}"
        case LineBreak():
            return "\\\\"
        case Item(body=body, label=label):
            rendered = "\\item"
            if label is not None:
                rendered += f"[{{{render_nodes(label, config)}}}]"
            text = render_nodes(body, config)
            return f"{rendered} {text}" if text else rendered
        case _:
            raise TypeError(f"Unsupported content node: {type(node).__name__}")


def render_nodes(nodes: Sequence[ContentNode], config: BuilderConfig | None = None) -> str:
    """Render a node sequence, one block construct per line.

    Consecutive inline nodes share a line; a ``LineBreak`` closes the current
    line. The result carries no trailing newline.
    """
    config = config or _DEFAULT_CONFIG
    lines: list[str] = []
    inline: list[str] = []
    for node in nodes:
        if is_block(node):
            if inline:
                lines.append("".join(inline))
                inline.clear()
            lines.append(render_node(node, config))
            continue
        inline.append(render_node(node, config))
        if isinstance(node, LineBreak):
            lines.append("".join(inline))
            inline.clear()
    if inline:
        lines.append("".join(inline))
    return "\n".join(lines)


__all__ = [
    "Citation",
    "ClassDeclaration",
    "ContentNode",
    "Directive",
    "DocumentBoundary",
    "EnvironmentNode",
    "FileInclusion",
    "Footnote",
    "Formatted",
    "InclusionKind",
    "Item",
    "Label",
    "LineBreak",
    "Literal",
    "PackageDeclaration",
    "Raw",
    "RawCommand",
    "Reference",
    "SectionLevel",
    "Sectioning",
    "SpaceDirection",
    "Spacing",
    "TextColor",
    "TextStyle",
    "TitleField",
    "TitleMeta",
    "is_block",
    "is_character_exact",
    "render_node",
    "render_nodes",
]
