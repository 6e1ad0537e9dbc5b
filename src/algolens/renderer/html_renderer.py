"""Render parsed algorithm content into a self-contained HTML page."""

from __future__ import annotations

import html
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from algolens.content.base import (
    SECTIONS,
    Algorithm,
    Bold,
    Callout,
    Category,
    CodeBlock,
    ContentNode,
    DeepDiveTrigger,
    Heading,
    InlineSpan,
    LineBreak,
    ListItem,
    Paragraph,
    PlainText,
    TooltipTrigger,
)
from algolens.content.inline import parse_bold
from algolens.content.parser import ContentParser

logger = logging.getLogger(__name__)

CODE_STYLES = {False: "vs", True: "monokai"}

CALLOUT_LABELS = {
    "info": "Info",
    "warning": "Warning",
    "tip": "Tip",
    "definition": "Definition",
    "algorithm": "Algorithm",
}


@dataclass(slots=True)
class RenderedAlgorithm:
    id: str
    title: str
    anchor: str
    sections: list[dict[str, str]]
    dialogs: str = ""


@dataclass(slots=True)
class _RenderContext:
    dark_mode: bool
    anchor: str
    dialogs: list[str] = field(default_factory=list)

    def reserve_dialog(self) -> tuple[int, str]:
        """Reserve a slot so nested dialogs keep document order."""
        self.dialogs.append("")
        return len(self.dialogs) - 1, f"{self.anchor}-dive-{len(self.dialogs)}"


class HTMLRenderer:
    """Render a catalog (or a bare node list) using the page template."""

    def __init__(self, template_path: Path | None = None, default_code_language: str = "go") -> None:
        if template_path is None:
            template_path = Path(__file__).resolve().parent.parent / "template" / "catalog.html"

        loader = FileSystemLoader(str(template_path.parent))
        self._env = Environment(loader=loader, autoescape=True, trim_blocks=True, lstrip_blocks=True)
        self._template_name = template_path.name
        self._parser = ContentParser(default_code_language=default_code_language)

    def render(
        self,
        categories: list[Category],
        *,
        title_override: str | None = None,
        dark_mode: bool = False,
        selected: Iterable[str] | None = None,
    ) -> str:
        wanted = set(selected) if selected is not None else None

        nav = []
        rendered: list[RenderedAlgorithm] = []
        for category in categories:
            algorithms = [a for a in category.algorithms if wanted is None or a.id in wanted]
            if not algorithms:
                continue
            items = []
            for algorithm in algorithms:
                item = self._render_algorithm(algorithm, dark_mode=dark_mode)
                rendered.append(item)
                items.append({"title": item.title, "anchor": item.anchor})
            nav.append({"name": category.name, "items": items})

        template = self._env.get_template(self._template_name)
        return template.render(
            page_title=title_override or "Algorithms",
            nav=nav,
            algorithms=rendered,
            dark_mode=dark_mode,
        )

    def render_nodes(self, nodes: list[ContentNode], *, dark_mode: bool = False, anchor: str = "content") -> str:
        """Render a node list to an HTML fragment, deep-dive dialogs appended."""
        ctx = _RenderContext(dark_mode=dark_mode, anchor=anchor)
        body = self._render_nodes(nodes, ctx)
        return "\n".join([body, *ctx.dialogs])

    def _render_algorithm(self, algorithm: Algorithm, *, dark_mode: bool) -> RenderedAlgorithm:
        anchor = f"alg-{algorithm.id}"
        ctx = _RenderContext(dark_mode=dark_mode, anchor=anchor)

        sections = []
        for section in SECTIONS:
            nodes = self._parser.parse(algorithm.section_text(section), algorithm.explanations_for(section))
            body = self._render_nodes(nodes, ctx)
            if section == "solution" and algorithm.code:
                code = self._render_code(CodeBlock(language=algorithm.code_language, code=algorithm.code), ctx)
                body += f'\n<h3 class="implementation-heading">Implementation</h3>\n{code}'
            sections.append({"key": section, "label": section.capitalize(), "html": body})

        return RenderedAlgorithm(
            id=algorithm.id,
            title=algorithm.title,
            anchor=anchor,
            sections=sections,
            dialogs="\n".join(ctx.dialogs),
        )

    def _render_nodes(self, nodes: list[ContentNode], ctx: _RenderContext) -> str:
        parts: list[str] = []
        i = 0
        while i < len(nodes):
            node = nodes[i]
            if isinstance(node, ListItem):
                # Consecutive items of the same kind share one list element.
                tag = "ol" if node.ordered else "ul"
                items: list[str] = []
                while i < len(nodes) and isinstance(nodes[i], ListItem) and nodes[i].ordered == node.ordered:
                    items.append(f"<li>{self._render_inline(nodes[i].inline, ctx)}</li>")
                    i += 1
                parts.append(f'<{tag} class="content-list">{"".join(items)}</{tag}>')
                continue

            parts.append(self._render_block(node, ctx))
            i += 1

        return "\n".join(part for part in parts if part)

    def _render_block(self, node: ContentNode, ctx: _RenderContext) -> str:
        if isinstance(node, Heading):
            return f'<h3 class="content-heading">{html.escape(node.text)}</h3>'

        if isinstance(node, Paragraph):
            return f'<p class="content-paragraph">{self._render_inline(node.inline, ctx)}</p>'

        if isinstance(node, Callout):
            label = CALLOUT_LABELS.get(node.kind, node.kind.capitalize())
            body = self._render_nodes(node.body, ctx)
            return (
                f'<div class="callout callout-{html.escape(node.kind)}" role="note">'
                f'<div class="callout-label">{label}</div><div class="callout-body">{body}</div></div>'
            )

        if isinstance(node, CodeBlock):
            return self._render_code(node, ctx)

        if isinstance(node, LineBreak):
            return "<br />"

        return ""

    def _render_inline(self, spans: list[InlineSpan], ctx: _RenderContext) -> str:
        out: list[str] = []
        for span in spans:
            if isinstance(span, PlainText):
                out.append(html.escape(span.text))
            elif isinstance(span, Bold):
                out.append(f"<strong>{html.escape(span.text)}</strong>")
            elif isinstance(span, TooltipTrigger):
                tooltip = self._render_inline(parse_bold(span.explanation_content), ctx)
                out.append(
                    '<span class="tooltip-trigger" tabindex="0">'
                    f"{html.escape(span.trigger_text)}"
                    f'<span class="tooltip-content" role="tooltip">{tooltip}</span>'
                    "</span>"
                )
            elif isinstance(span, DeepDiveTrigger):
                out.append(self._render_deep_dive(span, ctx))
        return "".join(out)

    def _render_deep_dive(self, span: DeepDiveTrigger, ctx: _RenderContext) -> str:
        # Dialogs are block content, so they are collected and emitted after the
        # algorithm body rather than inside the paragraph holding the trigger.
        slot, dialog_id = ctx.reserve_dialog()
        body = self._render_nodes(self._parser.parse(span.explanation_content), ctx)
        ctx.dialogs[slot] = (
            f'<dialog class="deep-dive" id="{dialog_id}">'
            f'<div class="deep-dive-header"><h2>{html.escape(span.title)}</h2>'
            '<form method="dialog"><button class="deep-dive-close" aria-label="Close">&times;</button></form></div>'
            f'<div class="deep-dive-body">{body}</div></dialog>'
        )
        return (
            f'<button type="button" class="deep-dive-trigger" data-dialog="{dialog_id}">'
            f"{html.escape(span.trigger_text)}</button>"
        )

    def _render_code(self, block: CodeBlock, ctx: _RenderContext) -> str:
        formatter = HtmlFormatter(noclasses=True, style=CODE_STYLES[ctx.dark_mode], cssclass="code-block")
        return highlight(block.code, _lexer_for(block.language), formatter)


def _lexer_for(language: str):
    try:
        return get_lexer_by_name(language)
    except ClassNotFound:
        logger.debug("No lexer for language %r, rendering as plain text", language)
        return TextLexer()
