"""Vocabulary of document classes, options, colours and environments."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypeAlias


class DocumentClass(str, Enum):
    """Standard LaTeX document classes. Any string names a custom class."""

    ARTICLE = "article"
    BOOK = "book"
    LETTER = "letter"
    REPORT = "report"
    SLIDES = "slides"


class DocumentClassOption(str, Enum):
    """Options understood by the standard document classes."""

    A4PAPER = "a4paper"
    A5PAPER = "a5paper"
    B5PAPER = "b5paper"
    EXECUTIVEPAPER = "executivepaper"
    LEGALPAPER = "legalpaper"
    LETTERPAPER = "letterpaper"
    DRAFT = "draft"
    FINAL = "final"
    FLEQN = "fleqn"
    LANDSCAPE = "landscape"
    LEQNO = "leqno"
    OPENBIB = "openbib"
    TITLEPAGE = "titlepage"
    NOTITLEPAGE = "notitlepage"
    ONECOLUMN = "onecolumn"
    TWOCOLUMN = "twocolumn"
    ONESIDE = "oneside"
    TWOSIDE = "twoside"
    OPENRIGHT = "openright"
    OPENANY = "openany"


class ColorModel(str, Enum):
    """Colour models accepted by ``\\textcolor``."""

    CMYK = "cmyk"
    GRAY = "gray"
    RGB = "rgb"
    RGB_FULL = "RGB"
    NAMED = "named"


class FileContentsOption(str, Enum):
    """Options of the ``filecontents`` environment."""

    FORCE = "force"
    OVERWRITE = "overwrite"
    NOHEADER = "noheader"
    NOSEARCH = "nosearch"


class EnvironmentKind(str, Enum):
    """Environments known to standard LaTeX. Any string names a custom one."""

    ABSTRACT = "abstract"
    ARRAY = "array"
    CENTER = "center"
    DESCRIPTION = "description"
    DISPLAYMATH = "displaymath"
    DOCUMENT = "document"
    ENUMERATE = "enumerate"
    EQNARRAY = "eqnarray"
    EQUATION = "equation"
    FIGURE = "figure"
    FILECONTENTS = "filecontents"
    FLUSHLEFT = "flushleft"
    FLUSHRIGHT = "flushright"
    ITEMIZE = "itemize"
    LIST = "list"
    MATH = "math"
    MINIPAGE = "minipage"
    PICTURE = "picture"
    QUOTATION = "quotation"
    QUOTE = "quote"
    TABBING = "tabbing"
    TABLE = "table"
    TABULAR = "tabular"
    THEBIBLIOGRAPHY = "thebibliography"
    THEOREM = "theorem"
    TITLEPAGE = "titlepage"
    TRIVLIST = "trivlist"
    VERBATIM = "verbatim"
    VERSE = "verse"


def enum_text(value: object) -> str:
    """Return the LaTeX spelling of an enum member or any other value."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _optional(value: object | None) -> str:
    return "" if value is None else f"[{enum_text(value)}]"


class EnvironmentParams(ABC):
    """Arguments written right after ``\\begin{kind}``."""

    __slots__ = ()

    kind: ClassVar[EnvironmentKind]

    @abstractmethod
    def arguments(self) -> str:
        """Return the argument suffix for the begin marker."""


@dataclass(frozen=True, slots=True)
class ArrayParams(EnvironmentParams):
    cols: str
    pos: str | None = None

    kind: ClassVar[EnvironmentKind] = EnvironmentKind.ARRAY

    def arguments(self) -> str:
        return f"{_optional(self.pos)}{{{self.cols}}}"


@dataclass(frozen=True, slots=True)
class TabularParams(EnvironmentParams):
    cols: str
    pos: str | None = None

    kind: ClassVar[EnvironmentKind] = EnvironmentKind.TABULAR

    def arguments(self) -> str:
        return f"{_optional(self.pos)}{{{self.cols}}}"


@dataclass(frozen=True, slots=True)
class FigureParams(EnvironmentParams):
    placement: str | None = None

    kind: ClassVar[EnvironmentKind] = EnvironmentKind.FIGURE

    def arguments(self) -> str:
        return _optional(self.placement)


@dataclass(frozen=True, slots=True)
class TableParams(EnvironmentParams):
    placement: str | None = None

    kind: ClassVar[EnvironmentKind] = EnvironmentKind.TABLE

    def arguments(self) -> str:
        return _optional(self.placement)


@dataclass(frozen=True, slots=True)
class FileContentsParams(EnvironmentParams):
    filename: str
    option: FileContentsOption | str | None = None

    kind: ClassVar[EnvironmentKind] = EnvironmentKind.FILECONTENTS

    def arguments(self) -> str:
        return f"{_optional(self.option)}{{{self.filename}}}"


@dataclass(frozen=True, slots=True)
class ListParams(EnvironmentParams):
    labeling: str
    spacing: str

    kind: ClassVar[EnvironmentKind] = EnvironmentKind.LIST

    def arguments(self) -> str:
        return f"{{{self.labeling}}}{{{self.spacing}}}"


@dataclass(frozen=True, slots=True)
class MinipageParams(EnvironmentParams):
    """Minipage arguments.

    Optional arguments are positional in LaTeX: unset values before the last
    provided one render as an empty ``[]`` placeholder, trailing unset values
    are dropped.
    """

    width: str
    position: str | None = None
    height: str | None = None
    inner_pos: str | None = None

    kind: ClassVar[EnvironmentKind] = EnvironmentKind.MINIPAGE

    def arguments(self) -> str:
        optional = [self.position, self.height, self.inner_pos]
        while optional and optional[-1] is None:
            optional.pop()
        prefix = "".join(f"[{value or ''}]" for value in optional)
        return f"{prefix}{{{self.width}}}"


@dataclass(frozen=True, slots=True)
class PictureParams(EnvironmentParams):
    size: tuple[str | float, str | float]
    offset: tuple[str | float, str | float] | None = None

    kind: ClassVar[EnvironmentKind] = EnvironmentKind.PICTURE

    def arguments(self) -> str:
        width, height = self.size
        rendered = f"({width},{height})"
        if self.offset is not None:
            x, y = self.offset
            rendered += f"({x},{y})"
        return rendered


@dataclass(frozen=True, slots=True)
class TheBibliographyParams(EnvironmentParams):
    widest_label: str

    kind: ClassVar[EnvironmentKind] = EnvironmentKind.THEBIBLIOGRAPHY

    def arguments(self) -> str:
        return f"{{{self.widest_label}}}"


@dataclass(frozen=True, slots=True)
class Environment:
    """Resolved environment: its name and the begin-marker arguments."""

    name: str
    arguments: str = ""

    def begin(self) -> str:
        return f"\\begin{{{self.name}}}{self.arguments}"

    def end(self) -> str:
        return f"\\end{{{self.name}}}"


EnvironmentSpec: TypeAlias = EnvironmentKind | EnvironmentParams | Environment | str


def resolve_environment(spec: EnvironmentSpec) -> Environment:
    """Normalise any accepted environment designation into an ``Environment``."""
    match spec:
        case Environment():
            return spec
        case EnvironmentParams():
            return Environment(spec.kind.value, spec.arguments())
        case EnvironmentKind():
            return Environment(spec.value)
        case str():
            name = spec.strip()
            if not name:
                raise ValueError("Environment name cannot be empty.")
            return Environment(name)
        case _:
            raise TypeError(f"Unsupported environment designation: {type(spec).__name__}")


__all__ = [
    "ArrayParams",
    "ColorModel",
    "DocumentClass",
    "DocumentClassOption",
    "Environment",
    "EnvironmentKind",
    "EnvironmentParams",
    "EnvironmentSpec",
    "FigureParams",
    "FileContentsOption",
    "FileContentsParams",
    "ListParams",
    "MinipageParams",
    "PictureParams",
    "TableParams",
    "TabularParams",
    "TheBibliographyParams",
    "enum_text",
    "resolve_environment",
]
