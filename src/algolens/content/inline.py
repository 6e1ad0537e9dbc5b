"""Inline formatting: bold spans and explanation triggers within a single line."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .base import Bold, DeepDiveTrigger, DetailedExplanation, InlineSpan, PlainText, TooltipTrigger

_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")


def parse_inline(text: str, explanations: Iterable[DetailedExplanation] = ()) -> list[InlineSpan]:
    """Resolve triggers and bold markers in one line of text.

    Only the first explanation whose trigger occurs in *text* is applied, and only
    at its first occurrence. Trigger lookup runs on the raw line, so a trigger that
    straddles ``**`` markers still matches; the text on either side is then
    bold-resolved independently.
    """
    for explanation in explanations:
        if not explanation.trigger:
            continue
        pos = text.find(explanation.trigger)
        if pos == -1:
            continue
        before = text[:pos]
        after = text[pos + len(explanation.trigger):]
        return [*parse_bold(before), make_trigger(explanation), *parse_bold(after)]

    return parse_bold(text)


def parse_bold(text: str) -> list[InlineSpan]:
    """Split *text* into ``PlainText`` and ``Bold`` spans.

    Markers pair up left to right; a leftover ``**`` is kept as literal text.
    """
    spans: list[InlineSpan] = []
    current = 0
    for m in _BOLD_RE.finditer(text):
        if m.start() > current:
            spans.append(PlainText(text[current:m.start()]))
        spans.append(Bold(m.group(1)))
        current = m.end()

    if current < len(text):
        spans.append(PlainText(text[current:]))

    return spans


def make_trigger(explanation: DetailedExplanation) -> TooltipTrigger | DeepDiveTrigger:
    if explanation.is_deep_dive:
        return DeepDiveTrigger(
            trigger_text=explanation.trigger,
            title=explanation.title or explanation.trigger,
            explanation_content=explanation.content,
        )
    return TooltipTrigger(trigger_text=explanation.trigger, explanation_content=explanation.content)
