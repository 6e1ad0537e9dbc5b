"""Tests for the content parser.

Covers:
- Paragraphs and line breaks for unmarked text
- Headings (whole-line bold) vs inline bold
- Bullet and numbered list items
- Callout blocks, including unknown kinds and unterminated blocks
- Code fences with and without language tags
- Section-scoped explanation triggers
"""

from __future__ import annotations

from algolens.content.base import (
    Bold,
    Callout,
    CodeBlock,
    DeepDiveTrigger,
    DetailedExplanation,
    Heading,
    LineBreak,
    ListItem,
    Paragraph,
    PlainText,
    TooltipTrigger,
)
from algolens.content.parser import (
    BlankLine,
    BulletLine,
    CalloutOpen,
    ContentParser,
    FenceOpen,
    HeadingLine,
    NumberedLine,
    TextLine,
    classify_line,
    parse_content,
    split_lines,
)


def _texts(node) -> list[str]:
    return [span.text for span in node.inline]


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------

def test_classify_line_tokens() -> None:
    assert classify_line("[CALLOUT:Info]") == CalloutOpen(kind="info")
    assert classify_line("```python") == FenceOpen(language="python")
    assert classify_line("```") == FenceOpen(language="")
    assert classify_line("**Steps:**") == HeadingLine(text="Steps:")
    assert classify_line("- item") == BulletLine(rest="item")
    assert classify_line("• item") == BulletLine(rest="item")
    assert classify_line("12. item") == NumberedLine(rest="item")
    assert classify_line("   ") == BlankLine()
    assert classify_line("hello") == TextLine(text="hello")


def test_classify_line_near_misses_are_text() -> None:
    assert classify_line("[CALLOUT:NOTE]") == TextLine(text="[CALLOUT:NOTE]")
    assert classify_line("-not a bullet") == TextLine(text="-not a bullet")
    assert classify_line("3.14 is pi") == TextLine(text="3.14 is pi")
    assert classify_line("**a** and **b**") == TextLine(text="**a** and **b**")
    assert classify_line("****") == TextLine(text="****")


# ---------------------------------------------------------------------------
# Paragraphs and line breaks
# ---------------------------------------------------------------------------

def test_unmarked_text_yields_paragraphs_and_breaks() -> None:
    nodes = parse_content("first line\nsecond line\n\nthird line")
    assert nodes == [
        Paragraph([PlainText("first line")]),
        Paragraph([PlainText("second line")]),
        LineBreak(),
        Paragraph([PlainText("third line")]),
    ]


def test_empty_input_yields_nothing() -> None:
    assert parse_content("") == []


def test_whitespace_only_lines_are_breaks() -> None:
    assert parse_content("  \n\t") == [LineBreak(), LineBreak()]


def test_trailing_newline_and_crlf() -> None:
    assert parse_content("a\r\nb\n") == [Paragraph([PlainText("a")]), Paragraph([PlainText("b")])]


def test_lines_split_on_newline_only() -> None:
    assert split_lines("a\u2028b\x0bc\n\nd\n") == ["a\u2028b\x0bc", "", "d"]
    assert parse_content("a\u2028b") == [Paragraph([PlainText("a\u2028b")])]


def test_code_fence_keeps_other_line_separators() -> None:
    assert parse_content("```\na\x0cb\x85c\n```") == [CodeBlock(language="go", code="a\x0cb\x85c")]


# ---------------------------------------------------------------------------
# Headings and bold
# ---------------------------------------------------------------------------

def test_whole_line_bold_is_heading() -> None:
    assert parse_content("**x**") == [Heading(text="x")]


def test_inline_bold_in_paragraph() -> None:
    assert parse_content("a **x** b") == [Paragraph([PlainText("a "), Bold("x"), PlainText(" b")])]


def test_two_bold_spans_on_one_line_are_not_a_heading() -> None:
    nodes = parse_content("**BFS** vs **DFS**")
    assert nodes == [Paragraph([Bold("BFS"), PlainText(" vs "), Bold("DFS")])]


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

def test_list_items_keep_order() -> None:
    nodes = parse_content("- a\n- b\n1. c\n2. d")
    assert [(n.ordered, _texts(n)) for n in nodes] == [
        (False, ["a"]),
        (False, ["b"]),
        (True, ["c"]),
        (True, ["d"]),
    ]
    assert all(isinstance(n, ListItem) for n in nodes)


def test_empty_list_items() -> None:
    assert classify_line("- ") == BulletLine(rest="")
    assert classify_line("1. ") == NumberedLine(rest="")
    assert parse_content("- ") == [ListItem(ordered=False, inline=[])]
    assert parse_content("• \n1. ") == [ListItem(ordered=False, inline=[]), ListItem(ordered=True, inline=[])]


def test_list_marker_with_trailing_whitespace() -> None:
    assert parse_content("  - item  ") == [ListItem(ordered=False, inline=[PlainText("item")])]


def test_list_item_inline_formatting() -> None:
    nodes = parse_content("• **Graph**: adjacency list")
    assert nodes == [ListItem(ordered=False, inline=[Bold("Graph"), PlainText(": adjacency list")])]


# ---------------------------------------------------------------------------
# Callouts
# ---------------------------------------------------------------------------

def test_callout_block() -> None:
    nodes = parse_content("[CALLOUT:WARNING]\nline one\nline two\n[/CALLOUT]")
    assert nodes == [
        Callout(
            kind="warning",
            body=[Paragraph([PlainText("line one")]), Paragraph([PlainText("line two")])],
        )
    ]


def test_callout_position_and_following_lines() -> None:
    nodes = parse_content("before\n[CALLOUT:info]\ninside\n[/CALLOUT]\nafter")
    assert nodes == [
        Paragraph([PlainText("before")]),
        Callout(kind="info", body=[Paragraph([PlainText("inside")])]),
        Paragraph([PlainText("after")]),
    ]


def test_unterminated_callout_consumes_rest() -> None:
    assert parse_content("[CALLOUT:TIP]\nonly line") == [
        Callout(kind="tip", body=[Paragraph([PlainText("only line")])])
    ]


def test_unknown_callout_kind_is_plain_text() -> None:
    nodes = parse_content("[CALLOUT:NOTE]\nbody\n[/CALLOUT]")
    assert nodes[0] == Paragraph([PlainText("[CALLOUT:NOTE]")])
    assert nodes[1] == Paragraph([PlainText("body")])
    assert len(nodes) == 3


def test_callout_body_is_trimmed_and_parsed_recursively() -> None:
    text = "[CALLOUT:ALGORITHM]\n\n**Steps**\n1. enqueue start\n```\nqueue = [s]\n```\n\n[/CALLOUT]"
    nodes = ContentParser(default_code_language="python").parse(text)
    assert nodes == [
        Callout(
            kind="algorithm",
            body=[
                Heading("Steps"),
                ListItem(ordered=True, inline=[PlainText("enqueue start")]),
                CodeBlock(language="python", code="queue = [s]"),
            ],
        )
    ]


def test_callout_body_reparses_identically() -> None:
    inner = "**Key idea**\n- mark visited\n\nUse a **queue**."
    [callout] = parse_content(f"[CALLOUT:DEFINITION]\n{inner}\n[/CALLOUT]")
    assert parse_content(inner) == callout.body


def test_callouts_do_not_nest() -> None:
    nodes = parse_content("[CALLOUT:INFO]\n[CALLOUT:TIP]\ninner\n[/CALLOUT]\nouter\n[/CALLOUT]")
    assert nodes[0] == Callout(kind="info", body=[Callout(kind="tip", body=[Paragraph([PlainText("inner")])])])
    assert nodes[1] == Paragraph([PlainText("outer")])
    assert nodes[2] == Paragraph([PlainText("[/CALLOUT]")])


# ---------------------------------------------------------------------------
# Code fences
# ---------------------------------------------------------------------------

def test_code_fence_with_language() -> None:
    nodes = parse_content("```python\ndef f():\n    return 1\n```\nafter")
    assert nodes == [
        CodeBlock(language="python", code="def f():\n    return 1"),
        Paragraph([PlainText("after")]),
    ]


def test_code_fence_default_language() -> None:
    assert parse_content("```\nx := 1\n```") == [CodeBlock(language="go", code="x := 1")]
    assert parse_content("```\nx = 1\n```", default_code_language="rust") == [CodeBlock(language="rust", code="x = 1")]


def test_code_fence_keeps_markup_verbatim() -> None:
    nodes = parse_content("```\n- not a list\n**not bold**\n\n[CALLOUT:INFO]\n```")
    assert nodes == [CodeBlock(language="go", code="- not a list\n**not bold**\n\n[CALLOUT:INFO]")]


def test_unterminated_code_fence_runs_to_end() -> None:
    assert parse_content("```go\nfmt.Println(1)\nreturn") == [
        CodeBlock(language="go", code="fmt.Println(1)\nreturn")
    ]


# ---------------------------------------------------------------------------
# Explanation triggers
# ---------------------------------------------------------------------------

def test_section_filter_applies_to_triggers() -> None:
    explanations = [
        DetailedExplanation(trigger="O(V + E)", section="problem", content="wrong section"),
        DetailedExplanation(trigger="O(V + E)", section="solution", content="Every edge once."),
    ]
    [para] = parse_content("Cost is O(V + E).", explanations, section="solution")
    assert para.inline[1] == TooltipTrigger(trigger_text="O(V + E)", explanation_content="Every edge once.")

    [para] = parse_content("Cost is O(V + E).", explanations, section="improvements")
    assert para.inline == [PlainText("Cost is O(V + E).")]


def test_long_explanation_yields_deep_dive() -> None:
    explanations = [DetailedExplanation(trigger="O(V + E)", section="solution", content="c" * 501)]
    [para] = parse_content("Cost is O(V + E).", explanations, section="solution")
    assert isinstance(para.inline[1], DeepDiveTrigger)


def test_triggers_apply_inside_lists_and_callouts() -> None:
    explanations = [DetailedExplanation(trigger="visited", section="algorithm", content="A set of seen nodes.")]
    nodes = parse_content("- mark visited\n[CALLOUT:TIP]\nkeep visited small\n[/CALLOUT]", explanations)
    assert nodes[0].inline[1] == TooltipTrigger(trigger_text="visited", explanation_content="A set of seen nodes.")
    assert nodes[1].body[0].inline[1].trigger_text == "visited"


def test_headings_are_not_trigger_resolved() -> None:
    explanations = [DetailedExplanation(trigger="Steps", section="solution", content="x")]
    assert parse_content("**Steps**", explanations) == [Heading("Steps")]
