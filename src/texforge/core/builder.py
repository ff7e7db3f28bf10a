"""Builders accumulating content nodes and rendering LaTeX documents.

``ContentBuilder`` collects body content (text, formatting, sectioning,
environments) and is what callable content arguments receive.
``DocumentBuilder`` adds the document lifecycle on top of it::

    builder = DocumentBuilder()
    builder.set_document_class(DocumentClass.ARTICLE)
    builder.begin_document()
    builder.section("Introduction").add_literal("Hello.")
    builder.end_document()
    latex = builder.build_document()

Builders are single-owner objects. They hold no lock: share one across
threads only behind external synchronisation. Rendering never mutates a
builder and can be repeated.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeAlias, TypeVar

from .config import BuilderConfig, coerce_config
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import StateError, StructureError
from .models import (
    ColorModel,
    DocumentClass,
    Environment,
    EnvironmentSpec,
    enum_text,
    resolve_environment,
)
from .nodes import (
    Citation,
    ClassDeclaration,
    ContentNode,
    Directive,
    DocumentBoundary,
    EnvironmentNode,
    FileInclusion,
    Footnote,
    Formatted,
    InclusionKind,
    Item,
    Label,
    LineBreak,
    Literal,
    PackageDeclaration,
    Raw,
    RawCommand,
    Reference,
    SectionLevel,
    Sectioning,
    SpaceDirection,
    Spacing,
    TextColor,
    TextStyle,
    TitleField,
    TitleMeta,
    is_character_exact,
    render_nodes,
)
from .options import Options, normalise_options


Content: TypeAlias = "str | ContentNode | Iterable[ContentNode] | Callable[[ContentBuilder], Any]"

_NODE_TYPES = ContentNode.__args__  # type: ignore[attr-defined]

B = TypeVar("B", bound="ContentBuilder")


class BuilderState(str, Enum):
    """Lifecycle of a document builder."""

    PREAMBLE = "preamble"
    IN_DOCUMENT = "document"
    CLOSED = "closed"


@dataclass(slots=True)
class _OpenEnvironment:
    environment: Environment
    body: list[ContentNode] = field(default_factory=list)


def _check_exact_body(environment: Environment, nodes: Iterable[ContentNode]) -> None:
    # LaTeX does not interpret escapes inside these bodies.
    if not is_character_exact(environment):
        return
    for node in nodes:
        if isinstance(node, Literal):
            raise TypeError(
                f"'{environment.name}' bodies are emitted character for character; "
                "pass Raw nodes or use add_raw instead of escaped text."
            )


class ContentBuilder:
    """Accumulate body content in call order."""

    def __init__(
        self,
        config: BuilderConfig | Mapping[str, Any] | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.config = coerce_config(config)
        self.emitter: DiagnosticEmitter = emitter or LoggingEmitter(
            debug_enabled=self.config.debug
        )
        self._nodes: list[ContentNode] = []
        self._stack: list[_OpenEnvironment] = []

    # -- inspection -----------------------------------------------------------------

    @property
    def nodes(self) -> tuple[ContentNode, ...]:
        """Top-level nodes accumulated so far."""
        self._ensure_balanced("read nodes of")
        return tuple(self._nodes)

    @property
    def depth(self) -> int:
        """Number of environments currently open."""
        return len(self._stack)

    @property
    def open_environments(self) -> tuple[str, ...]:
        return tuple(frame.environment.name for frame in self._stack)

    # -- hooks ----------------------------------------------------------------------

    def _require_body(self, operation: str) -> None:
        """Validate that body content may be appended."""

    def _require_any(self, operation: str) -> None:
        """Validate that verbatim content may be appended."""

    def _append(self: B, node: ContentNode) -> B:
        if self._stack:
            frame = self._stack[-1]
            _check_exact_body(frame.environment, (node,))
            frame.body.append(node)
        else:
            self._nodes.append(node)
        return self

    def _structure_error(self, message: str) -> StructureError:
        error = StructureError(message, self.open_environments)
        self.emitter.error(str(error))
        return error

    def _ensure_balanced(self, action: str) -> None:
        if self._stack:
            raise self._structure_error(
                f"Cannot {action} the document with an unclosed environment"
            )

    def _content(self, content: Content) -> tuple[ContentNode, ...]:
        """Normalise any accepted content argument into a node tuple."""
        if isinstance(content, str):
            return (Literal(content),) if content else ()
        if isinstance(content, _NODE_TYPES):
            return (content,)
        if callable(content):
            fragment = ContentBuilder(self.config, emitter=self.emitter)
            content(fragment)
            return fragment.nodes
        if isinstance(content, Iterable):
            nodes = tuple(content)
            for node in nodes:
                if not isinstance(node, _NODE_TYPES):
                    raise TypeError(f"Unsupported content node: {type(node).__name__}")
            return nodes
        raise TypeError(f"Unsupported content: {type(content).__name__}")

    # -- text -----------------------------------------------------------------------

    def add_literal(self: B, text: str) -> B:
        """Append text; reserved characters are escaped when rendering."""
        self._require_body("add_literal")
        return self._append(Literal(text))

    def add_raw(self: B, text: str) -> B:
        """Append markup verbatim."""
        self._require_any("add_raw")
        return self._append(Raw(text))

    def command(
        self: B,
        name: str,
        *args: Content,
        options: Options = (),
        block: bool = False,
    ) -> B:
        """Append an arbitrary ``\\name[options]{arg}...`` command."""
        self._require_any("command")
        return self._append(
            RawCommand(
                name=name,
                args=tuple(self._content(arg) for arg in args),
                options=normalise_options(options),
                block=block,
            )
        )

    def _formatted(self: B, style: TextStyle, text: Content) -> B:
        self._require_body(f"text_{style.name.lower()}")
        return self._append(Formatted(style, self._content(text)))

    def text_bold(self: B, text: Content) -> B:
        return self._formatted(TextStyle.BOLD, text)

    def text_italic(self: B, text: Content) -> B:
        return self._formatted(TextStyle.ITALIC, text)

    def text_underline(self: B, text: Content) -> B:
        return self._formatted(TextStyle.UNDERLINE, text)

    def text_color(
        self: B, text: Content, color: str, model: ColorModel | str | None = None
    ) -> B:
        self._require_body("text_color")
        return self._append(TextColor(self._content(text), color, model))

    def footnote(self: B, text: Content) -> B:
        self._require_body("footnote")
        return self._append(Footnote(self._content(text)))

    def cite(self: B, keys: str | Iterable[str], note: str | None = None) -> B:
        """Cite one or more bibliography keys, ``note`` becomes the optional argument."""
        self._require_body("cite")
        key_tuple = (keys,) if isinstance(keys, str) else tuple(keys)
        if not key_tuple:
            raise ValueError("At least one citation key is required.")
        return self._append(Citation(key_tuple, note))

    def new_line(self: B) -> B:
        self._require_body("new_line")
        return self._append(LineBreak())

    def hspace(self: B, length: str) -> B:
        self._require_body("hspace")
        return self._append(Spacing(SpaceDirection.HORIZONTAL, length))

    def vspace(self: B, length: str) -> B:
        self._require_body("vspace")
        return self._append(Spacing(SpaceDirection.VERTICAL, length))

    # -- structure ------------------------------------------------------------------

    def _section(self: B, level: SectionLevel, title: Content, numbered: bool) -> B:
        self._require_body(level.value)
        return self._append(Sectioning(level, self._content(title), numbered))

    def part(self: B, title: Content, *, numbered: bool = True) -> B:
        return self._section(SectionLevel.PART, title, numbered)

    def chapter(self: B, title: Content, *, numbered: bool = True) -> B:
        return self._section(SectionLevel.CHAPTER, title, numbered)

    def section(self: B, title: Content, *, numbered: bool = True) -> B:
        return self._section(SectionLevel.SECTION, title, numbered)

    def subsection(self: B, title: Content, *, numbered: bool = True) -> B:
        return self._section(SectionLevel.SUBSECTION, title, numbered)

    def subsubsection(self: B, title: Content, *, numbered: bool = True) -> B:
        return self._section(SectionLevel.SUBSUBSECTION, title, numbered)

    def paragraph(self: B, title: Content, *, numbered: bool = True) -> B:
        return self._section(SectionLevel.PARAGRAPH, title, numbered)

    def subparagraph(self: B, title: Content, *, numbered: bool = True) -> B:
        return self._section(SectionLevel.SUBPARAGRAPH, title, numbered)

    def label(self: B, identifier: str) -> B:
        self._require_body("label")
        return self._append(Label(identifier))

    def ref_label(self: B, identifier: str) -> B:
        self._require_body("ref_label")
        return self._append(Reference(identifier))

    def item(self: B, text: Content = "", label: Content | None = None) -> B:
        self._require_body("item")
        item_label = None if label is None else self._content(label)
        return self._append(Item(self._content(text), item_label))

    def include(self: B, filename: str) -> B:
        self._require_body("include")
        return self._append(FileInclusion(InclusionKind.INCLUDE, filename))

    def input(self: B, filename: str) -> B:
        self._require_body("input")
        return self._append(FileInclusion(InclusionKind.INPUT, filename))

    def _directive(self: B, name: str) -> B:
        self._require_body(name)
        return self._append(Directive(name))

    def clear_page(self: B) -> B:
        return self._directive("clearpage")

    def new_page(self: B) -> B:
        return self._directive("newpage")

    def line_break(self: B) -> B:
        return self._directive("linebreak")

    def page_break(self: B) -> B:
        return self._directive("pagebreak")

    def no_indent(self: B) -> B:
        return self._directive("noindent")

    def centering(self: B) -> B:
        return self._directive("centering")

    # -- environments ---------------------------------------------------------------

    def env(self: B, kind: EnvironmentSpec, body: Content = "") -> B:
        """Append a complete environment in one call.

        ``body`` may be a string, nodes, or a callable filling a nested
        ``ContentBuilder``, which is how nested environments are expressed.

        ``verbatim`` and ``filecontents`` bodies must be given as ``Raw``
        nodes (or through ``add_raw``); plain text would be escaped and is
        rejected with ``TypeError``.
        """
        self._require_body("env")
        environment = resolve_environment(kind)
        nodes = self._content(body)
        _check_exact_body(environment, nodes)
        return self._append(EnvironmentNode(environment, nodes))

    def begin_env(self: B, kind: EnvironmentSpec) -> B:
        """Open an environment; following content lands in its body."""
        self._require_body("begin_env")
        environment = resolve_environment(kind)
        self._stack.append(_OpenEnvironment(environment))
        self.emitter.event(
            "environment_open", {"name": environment.name, "depth": len(self._stack)}
        )
        return self

    def end_env(self: B, kind: EnvironmentSpec | None = None) -> B:
        """Close the innermost environment, checking its kind when given."""
        self._require_body("end_env")
        if not self._stack:
            raise self._structure_error("Cannot close an environment: none is open")
        frame = self._stack[-1]
        if kind is not None:
            expected = resolve_environment(kind).name
            if expected != frame.environment.name:
                raise self._structure_error(
                    f"Cannot close '{expected}' while '{frame.environment.name}' is open"
                )
        depth = len(self._stack)
        self._stack.pop()
        self.emitter.event("environment_close", {"name": frame.environment.name, "depth": depth})
        return self._append(EnvironmentNode(frame.environment, tuple(frame.body)))

    @contextmanager
    def environment(self: B, kind: EnvironmentSpec) -> Iterator[B]:
        """Context manager form of ``begin_env``/``end_env``.

        The environment is only closed when the block completes; an exception
        leaves it open so the failure is not masked by a half-written body.
        """
        self.begin_env(kind)
        yield self
        self.end_env(kind)

    # -- rendering ------------------------------------------------------------------

    def build(self) -> str:
        """Render the accumulated content without a trailing newline."""
        self._ensure_balanced("render")
        return render_nodes(self._nodes, self.config)

    def __str__(self) -> str:
        return self.build()


class DocumentBuilder(ContentBuilder):
    """Assemble a complete document: preamble, body and closing marker."""

    def __init__(
        self,
        config: BuilderConfig | Mapping[str, Any] | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        super().__init__(config, emitter=emitter)
        self._state = BuilderState.PREAMBLE
        self._document_class: str | None = None
        self._packages: list[str] = []

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def document_class(self) -> str | None:
        return self._document_class

    def _require_state(self, operation: str, *states: BuilderState) -> None:
        if self._state not in states:
            raise StateError(operation, self._state)

    def _require_body(self, operation: str) -> None:
        self._require_state(operation, BuilderState.IN_DOCUMENT)

    def _require_any(self, operation: str) -> None:
        self._require_state(operation, BuilderState.PREAMBLE, BuilderState.IN_DOCUMENT)

    # -- preamble -------------------------------------------------------------------

    def set_document_class(
        self, document_class: DocumentClass | str, options: Options = ()
    ) -> DocumentBuilder:
        self._require_state("set_document_class", BuilderState.PREAMBLE)
        if self._document_class is not None:
            raise StateError(
                "set_document_class",
                self._state,
                f"document class already set to '{self._document_class}'",
            )
        if self._nodes:
            raise StateError(
                "set_document_class",
                self._state,
                "the document class must precede every other preamble line",
            )
        name = enum_text(document_class)
        self._document_class = name
        return self._append(ClassDeclaration(name, normalise_options(options)))

    def use_package(self, name: str, options: Options = ()) -> DocumentBuilder:
        self._require_state("use_package", BuilderState.PREAMBLE)
        if name in self._packages:
            self.emitter.warning(f"Package '{name}' is declared more than once.")
        self._packages.append(name)
        return self._append(PackageDeclaration(name, normalise_options(options)))

    # -- lifecycle ------------------------------------------------------------------

    def begin_document(self) -> DocumentBuilder:
        self._require_state("begin_document", BuilderState.PREAMBLE)
        self._state = BuilderState.IN_DOCUMENT
        self.emitter.event(
            "document_begin",
            {"document_class": self._document_class, "packages": len(self._packages)},
        )
        return self._append(DocumentBoundary(opening=True))

    def end_document(self) -> DocumentBuilder:
        self._require_state("end_document", BuilderState.IN_DOCUMENT)
        self._ensure_balanced("end")
        self._append(DocumentBoundary(opening=False))
        self._state = BuilderState.CLOSED
        self.emitter.event("document_end", {"nodes": len(self._nodes)})
        return self

    # -- title metadata -------------------------------------------------------------

    def _title_meta(self, title_field: TitleField, value: Content) -> DocumentBuilder:
        self._require_body(title_field.value)
        return self._append(TitleMeta(title_field, self._content(value)))

    def title(self, text: Content) -> DocumentBuilder:
        return self._title_meta(TitleField.TITLE, text)

    def author(self, text: Content) -> DocumentBuilder:
        return self._title_meta(TitleField.AUTHOR, text)

    def date(self, text: Content) -> DocumentBuilder:
        return self._title_meta(TitleField.DATE, text)

    def maketitle(self) -> DocumentBuilder:
        return self._directive("maketitle")

    # -- rendering ------------------------------------------------------------------

    def build_document(self) -> str:
        """Render the whole document, one construct per line."""
        rendered = self.build()
        return f"{rendered}\n" if rendered else rendered


__all__ = ["BuilderState", "Content", "ContentBuilder", "DocumentBuilder"]
