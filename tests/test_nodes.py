import pytest

from texforge import (
    ArrayParams,
    BuilderConfig,
    ColorModel,
    ContentBuilder,
    EnvironmentKind,
    FigureParams,
    FileContentsOption,
    FileContentsParams,
    ListParams,
    MinipageParams,
    PictureParams,
    TableParams,
    TabularParams,
    TheBibliographyParams,
    render_node,
    render_nodes,
)
from texforge.core.models import Environment, resolve_environment
from texforge.core.nodes import (
    Citation,
    EnvironmentNode,
    Formatted,
    Item,
    Label,
    LineBreak,
    Literal,
    Raw,
    RawCommand,
    Reference,
    SectionLevel,
    Sectioning,
    TextStyle,
    is_block,
)


@pytest.fixture
def content() -> ContentBuilder:
    return ContentBuilder()


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        (TextStyle.BOLD, "\\textbf{a\\_b}"),
        (TextStyle.ITALIC, "\\textit{a\\_b}"),
        (TextStyle.UNDERLINE, "\\underline{a\\_b}"),
    ],
)
def test_formatted_text_wraps_escaped_body(style: TextStyle, expected: str) -> None:
    assert render_node(Formatted(style, (Literal("a_b"),))) == expected


def test_sectioning_levels_and_starred_form() -> None:
    assert render_node(Sectioning(SectionLevel.SUBSUBSECTION, (Literal("Deep"),))) == (
        "\\subsubsection{Deep}"
    )
    assert render_node(Sectioning(SectionLevel.SECTION, (Literal("Q&A"),), numbered=False)) == (
        "\\section*{Q\\&A}"
    )


def test_labels_and_references_are_verbatim() -> None:
    assert render_node(Label("sec:intro_1")) == "\\label{sec:intro_1}"
    assert render_node(Reference("sec:intro_1")) == "\\ref{sec:intro_1}"


def test_raw_text_is_not_escaped() -> None:
    assert render_node(Raw("$x^2$")) == "$x^2$"


def test_raw_command_escapes_arguments_and_keeps_options() -> None:
    node = RawCommand("href", ((Raw("https://example.com"),), (Literal("50%"),)))
    assert render_node(node) == "\\href{https://example.com}{50\\%}"

    inline = RawCommand("LaTeX")
    assert render_node(inline) == "\\LaTeX{}"
    assert render_node(RawCommand("tableofcontents", block=True)) == "\\tableofcontents"


def test_inline_nodes_share_a_line_and_blocks_get_their_own() -> None:
    nodes = [
        Literal("See "),
        Reference("fig:a"),
        Literal("."),
        Label("para"),
        Literal("Next"),
        LineBreak(),
        Literal("Line"),
    ]

    assert render_nodes(nodes) == "See \\ref{fig:a}.\n\\label{para}\nNext\\\\\nLine"
    assert is_block(Label("x"))
    assert not is_block(Literal("x"))
    assert is_block(RawCommand("x", block=True))


def test_citations_and_items() -> None:
    assert render_node(Citation(("knuth", "lamport"))) == "\\cite{knuth,lamport}"
    assert render_node(Citation(("knuth",), "p.~5")) == "\\cite[p.~5]{knuth}"
    assert render_node(Item((Literal("Sweet"),), (Literal("Apple"),))) == (
        "\\item[{Apple}] Sweet"
    )
    assert render_node(Item(())) == "\\item"


def test_content_builder_inline_commands(content: ContentBuilder) -> None:
    content.add_literal("Price")
    content.footnote("in EUR")
    content.hspace("1em")
    content.text_color("red text", "red")
    content.text_color("mixed", "1,0,0", ColorModel.RGB)
    content.cite("knuth")
    content.vspace("2pt")

    assert content.build() == (
        "Price\\footnote{in EUR}\\hspace{1em}\\textcolor{red}{red text}"
        "\\textcolor[rgb]{1,0,0}{mixed}\\cite{knuth}\\vspace{2pt}"
    )


def test_content_builder_block_commands(content: ContentBuilder) -> None:
    content.include("chapter1").input("macros").clear_page().new_page()
    content.line_break().page_break().no_indent().paragraph("Para").subparagraph("Sub")
    content.part("I", numbered=False)

    assert content.build().splitlines() == [
        "\\include{chapter1}",
        "\\input{macros}",
        "\\clearpage",
        "\\newpage",
        "\\linebreak",
        "\\pagebreak",
        "\\noindent",
        "\\paragraph{Para}",
        "\\subparagraph{Sub}",
        "\\part*{I}",
    ]


def test_cite_requires_a_key(content: ContentBuilder) -> None:
    with pytest.raises(ValueError):
        content.cite([])


@pytest.mark.parametrize(
    ("designation", "expected"),
    [
        (ArrayParams("lcr"), "\\begin{array}{lcr}"),
        (TabularParams("|l|r|", pos="t"), "\\begin{tabular}[t]{|l|r|}"),
        (FigureParams("htbp"), "\\begin{figure}[htbp]"),
        (FigureParams(), "\\begin{figure}"),
        (TableParams("h"), "\\begin{table}[h]"),
        (
            FileContentsParams("data.csv", FileContentsOption.OVERWRITE),
            "\\begin{filecontents}[overwrite]{data.csv}",
        ),
        (
            ListParams("\\textbullet", "\\setlength{\\itemsep}{0pt}"),
            "\\begin{list}{\\textbullet}{\\setlength{\\itemsep}{0pt}}",
        ),
        (MinipageParams("0.5\\linewidth"), "\\begin{minipage}{0.5\\linewidth}"),
        (MinipageParams("5cm", position="t"), "\\begin{minipage}[t]{5cm}"),
        (MinipageParams("5cm", inner_pos="c"), "\\begin{minipage}[][][c]{5cm}"),
        (PictureParams((100, 50)), "\\begin{picture}(100,50)"),
        (PictureParams((100, 50), offset=(10, 5)), "\\begin{picture}(100,50)(10,5)"),
        (TheBibliographyParams("99"), "\\begin{thebibliography}{99}"),
        (EnvironmentKind.VERSE, "\\begin{verse}"),
        ("align*", "\\begin{align*}"),
    ],
)
def test_environment_begin_markers(designation: object, expected: str) -> None:
    environment = resolve_environment(designation)  # type: ignore[arg-type]
    assert environment.begin() == expected
    assert environment.end() == f"\\end{{{environment.name}}}"


def test_resolve_environment_rejects_invalid_designations() -> None:
    with pytest.raises(ValueError):
        resolve_environment("  ")
    with pytest.raises(TypeError):
        resolve_environment(3)  # type: ignore[arg-type]


def test_nested_environment_rendering_with_indentation() -> None:
    inner = EnvironmentNode(Environment("center"), (Literal("Hi"),))
    outer = EnvironmentNode(Environment("quote"), (inner, Literal("after")))
    config = BuilderConfig(indent=2)

    assert render_node(outer, config) == (
        "\\begin{quote}\n"
        "  \\begin{center}\n"
        "    Hi\n"
        "  \\end{center}\n"
        "  after\n"
        "\\end{quote}"
    )


def test_verbatim_bodies_are_never_indented() -> None:
    node = EnvironmentNode(Environment("verbatim"), (Raw("code\n  kept"),))

    assert render_node(node, BuilderConfig(indent=4)) == (
        "\\begin{verbatim}\ncode\n  kept\n\\end{verbatim}"
    )


def test_verbatim_nested_in_environment_keeps_its_body_exact() -> None:
    content = ContentBuilder(BuilderConfig(indent=2))
    content.env(
        EnvironmentKind.CENTER,
        lambda c: c.env(EnvironmentKind.VERBATIM, lambda v: v.add_raw("code\n  kept")),
    )

    assert content.build() == (
        "\\begin{center}\n"
        "  \\begin{verbatim}\n"
        "code\n"
        "  kept\n"
        "  \\end{verbatim}\n"
        "\\end{center}"
    )


def test_filecontents_two_levels_deep_keeps_its_body_exact() -> None:
    inner = EnvironmentNode(
        Environment("filecontents", "{data.csv}"), (Raw("a,b\n1,2"),)
    )
    node = EnvironmentNode(
        Environment("quote"), (EnvironmentNode(Environment("center"), (inner,)),)
    )

    assert render_node(node, BuilderConfig(indent=2)).splitlines() == [
        "\\begin{quote}",
        "  \\begin{center}",
        "    \\begin{filecontents}{data.csv}",
        "a,b",
        "1,2",
        "    \\end{filecontents}",
        "  \\end{center}",
        "\\end{quote}",
    ]


def test_empty_environment_has_only_markers(content: ContentBuilder) -> None:
    content.env(EnvironmentKind.CENTER)

    assert content.build() == "\\begin{center}\n\\end{center}"


def test_tabular_environment_through_builder(content: ContentBuilder) -> None:
    content.env(TabularParams("ll"), lambda t: t.add_raw("a & b \\\\"))

    assert content.build() == "\\begin{tabular}{ll}\na & b \\\\\n\\end{tabular}"


def test_legacy_accents_follow_builder_config() -> None:
    content = ContentBuilder(BuilderConfig(legacy_latex_accents=True))
    content.add_literal("café")

    assert "\\'{e}" in content.build()
    assert str(content) == content.build()
