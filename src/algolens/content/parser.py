"""Line-oriented parser for authored algorithm content.

Each line is first classified into one token of a small closed grammar, then a
single forward pass turns tokens into content nodes. Callouts and code fences
consume the lines up to their closing delimiter and contribute one node at the
position of their opening line. Malformed markup never raises; it degrades to
paragraph text or to a block that runs to the end of the input.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .base import (
    CALLOUT_KINDS,
    Callout,
    CodeBlock,
    ContentNode,
    DetailedExplanation,
    Heading,
    LineBreak,
    ListItem,
    Paragraph,
)
from .inline import parse_inline

_CALLOUT_OPEN_RE = re.compile(r"^\[CALLOUT:([A-Za-z]+)\]$", re.IGNORECASE)
_CALLOUT_CLOSE = "[/CALLOUT]"
_FENCE = "```"
_NUMBERED_RE = re.compile(r"^\d+\.\s")
_BULLET_MARKERS = ("- ", "• ")
_LINE_SPLIT_RE = re.compile(r"\r?\n")


# ---------------------------------------------------------------------------
# Line tokens
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class CalloutOpen:
    kind: str


@dataclass(slots=True)
class FenceOpen:
    language: str


@dataclass(slots=True)
class HeadingLine:
    text: str


@dataclass(slots=True)
class BulletLine:
    rest: str


@dataclass(slots=True)
class NumberedLine:
    rest: str


@dataclass(slots=True)
class BlankLine:
    pass


@dataclass(slots=True)
class TextLine:
    text: str


LineToken = CalloutOpen | FenceOpen | HeadingLine | BulletLine | NumberedLine | BlankLine | TextLine


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` (or ``\\r\\n``) only; a single trailing newline adds no line."""
    lines = _LINE_SPLIT_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def classify_line(line: str) -> LineToken:
    """Classify one raw line. Precedence follows the order of the checks below."""
    stripped = line.strip()

    m = _CALLOUT_OPEN_RE.match(stripped)
    if m and m.group(1).lower() in CALLOUT_KINDS:
        return CalloutOpen(kind=m.group(1).lower())

    if stripped.startswith(_FENCE):
        return FenceOpen(language=stripped[len(_FENCE):].strip())

    heading = _heading_text(stripped)
    if heading is not None:
        return HeadingLine(text=heading)

    # List markers need their trailing space, so only leading whitespace goes.
    leading = line.lstrip()
    for marker in _BULLET_MARKERS:
        if leading.startswith(marker):
            return BulletLine(rest=leading[len(marker):].strip())

    m = _NUMBERED_RE.match(leading)
    if m:
        return NumberedLine(rest=leading[m.end():].strip())

    if not stripped:
        return BlankLine()

    return TextLine(text=stripped)


def _heading_text(stripped: str) -> str | None:
    if len(stripped) < 5 or not (stripped.startswith("**") and stripped.endswith("**")):
        return None
    inner = stripped[2:-2]
    if "**" in inner or not inner.strip():
        return None
    return inner.strip()


# ---------------------------------------------------------------------------
# Block parsing
# ---------------------------------------------------------------------------

class ContentParser:
    """Parse one content section into an ordered list of content nodes."""

    def __init__(self, default_code_language: str = "go") -> None:
        self.default_code_language = default_code_language

    def parse(
        self,
        text: str,
        explanations: Iterable[DetailedExplanation] = (),
        *,
        section: str | None = None,
    ) -> list[ContentNode]:
        scoped = [exp for exp in explanations if section is None or exp.section == section]
        return self._parse_lines(split_lines(text), scoped)

    def _parse_lines(self, lines: list[str], explanations: list[DetailedExplanation]) -> list[ContentNode]:
        nodes: list[ContentNode] = []
        i = 0

        while i < len(lines):
            token = classify_line(lines[i])
            i += 1

            if isinstance(token, CalloutOpen):
                body, i = _collect_until(lines, i, lambda line: _CALLOUT_CLOSE in line)
                inner = "\n".join(body).strip()
                nodes.append(Callout(kind=token.kind, body=self._parse_lines(split_lines(inner), explanations)))
                continue

            if isinstance(token, FenceOpen):
                body, i = _collect_until(lines, i, lambda line: line.strip().startswith(_FENCE))
                nodes.append(
                    CodeBlock(language=token.language or self.default_code_language, code="\n".join(body))
                )
                continue

            if isinstance(token, HeadingLine):
                nodes.append(Heading(text=token.text))
            elif isinstance(token, BulletLine):
                nodes.append(ListItem(ordered=False, inline=parse_inline(token.rest, explanations)))
            elif isinstance(token, NumberedLine):
                nodes.append(ListItem(ordered=True, inline=parse_inline(token.rest, explanations)))
            elif isinstance(token, BlankLine):
                nodes.append(LineBreak())
            else:
                nodes.append(Paragraph(inline=parse_inline(token.text, explanations)))

        return nodes


def _collect_until(lines: list[str], start: int, is_close: Callable[[str], bool]) -> tuple[list[str], int]:
    """Collect lines verbatim from *start* up to the closing line.

    Returns the collected lines and the index after the closing line, or
    ``len(lines)`` when the block is never closed.
    """
    for idx in range(start, len(lines)):
        if is_close(lines[idx]):
            return lines[start:idx], idx + 1
    return lines[start:], len(lines)


def parse_content(
    text: str,
    explanations: Iterable[DetailedExplanation] = (),
    *,
    section: str | None = None,
    default_code_language: str = "go",
) -> list[ContentNode]:
    """Shortcut for ``ContentParser(default_code_language).parse(...)``."""
    return ContentParser(default_code_language).parse(text, explanations, section=section)
