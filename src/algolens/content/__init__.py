"""Content package: node IR and the authored-markup parser."""

from .base import (
    CALLOUT_KINDS,
    DEEP_DIVE_THRESHOLD,
    SECTIONS,
    Algorithm,
    Bold,
    Callout,
    Category,
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
from .inline import parse_inline
from .parser import ContentParser, parse_content

__all__ = [
    "CALLOUT_KINDS",
    "DEEP_DIVE_THRESHOLD",
    "SECTIONS",
    "Algorithm",
    "Bold",
    "Callout",
    "Category",
    "CodeBlock",
    "DeepDiveTrigger",
    "DetailedExplanation",
    "Heading",
    "LineBreak",
    "ListItem",
    "Paragraph",
    "PlainText",
    "TooltipTrigger",
    "ContentParser",
    "parse_content",
    "parse_inline",
]
