"""Core intermediate representation (IR) for parsed algorithm content."""

from __future__ import annotations

from dataclasses import dataclass, field

SECTIONS = ("problem", "algorithm", "solution", "improvements")
CALLOUT_KINDS = ("info", "warning", "tip", "definition", "algorithm")

# Explanations longer than this open in a modal instead of an inline tooltip.
DEEP_DIVE_THRESHOLD = 500


# ---------------------------------------------------------------------------
# Inline spans
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class PlainText:
    text: str


@dataclass(slots=True)
class Bold:
    text: str


@dataclass(slots=True)
class TooltipTrigger:
    trigger_text: str
    explanation_content: str


@dataclass(slots=True)
class DeepDiveTrigger:
    trigger_text: str
    title: str
    explanation_content: str


InlineSpan = PlainText | Bold | TooltipTrigger | DeepDiveTrigger


# ---------------------------------------------------------------------------
# Block nodes
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Heading:
    text: str


@dataclass(slots=True)
class Paragraph:
    inline: list[InlineSpan] = field(default_factory=list)


@dataclass(slots=True)
class ListItem:
    ordered: bool
    inline: list[InlineSpan] = field(default_factory=list)


@dataclass(slots=True)
class Callout:
    kind: str
    body: list[ContentNode] = field(default_factory=list)


@dataclass(slots=True)
class CodeBlock:
    language: str
    code: str


@dataclass(slots=True)
class LineBreak:
    pass


ContentNode = Heading | Paragraph | ListItem | Callout | CodeBlock | LineBreak


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class DetailedExplanation:
    trigger: str
    section: str
    content: str
    title: str | None = None

    @property
    def is_deep_dive(self) -> bool:
        return len(self.content) > DEEP_DIVE_THRESHOLD


@dataclass(slots=True)
class Algorithm:
    id: str
    title: str
    category: str
    problem: str = ""
    algorithm: str = ""
    solution: str = ""
    improvements: str = ""
    code: str | None = None
    code_language: str = "go"
    detailed_explanations: list[DetailedExplanation] = field(default_factory=list)

    def section_text(self, section: str) -> str:
        if section not in SECTIONS:
            raise ValueError(f"Unknown section: {section!r}")
        return getattr(self, section)

    def explanations_for(self, section: str) -> list[DetailedExplanation]:
        """Return the explanations scoped to *section*, in authored order."""
        return [exp for exp in self.detailed_explanations if exp.section == section]


@dataclass(slots=True)
class Category:
    id: str
    name: str
    algorithms: list[Algorithm] = field(default_factory=list)
