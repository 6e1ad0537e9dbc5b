"""Load an algorithm catalog from a directory of Markdown files.

Layout::

    catalog/
      graphs/
        _category.md            # optional, frontmatter ``name:``
        route-between-nodes.md  # one algorithm per file

An algorithm file carries YAML-like frontmatter (``title``, ``id``, ``language``)
followed by ``##`` sections: ``Problem``, ``Algorithm``, ``Solution``,
``Improvements``, ``Code`` and any number of
``Explanation: <trigger> {section=<section> title="..."}``.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from algolens.content.base import SECTIONS, Algorithm, Category, DetailedExplanation

logger = logging.getLogger(__name__)

CATEGORY_FILE = "_category.md"


class CatalogError(ValueError):
    """Raised when a catalog directory or one of its files is malformed."""


class CatalogLoader:
    """Read a catalog directory into ``Category`` objects."""

    def __init__(self, default_code_language: str = "go") -> None:
        self.default_code_language = default_code_language

    def load(self, root: Path) -> list[Category]:
        root = Path(root)
        if not root.is_dir():
            raise CatalogError(f"Catalog directory not found: {root}")

        categories: list[Category] = []
        seen_ids: dict[str, Path] = {}

        for category_dir in sorted(p for p in root.iterdir() if p.is_dir() and not p.name.startswith(".")):
            category = self._load_category(category_dir)
            for algorithm in category.algorithms:
                if algorithm.id in seen_ids:
                    raise CatalogError(
                        f"Duplicate algorithm id {algorithm.id!r} in {category_dir.name} "
                        f"(already defined under {seen_ids[algorithm.id].name})"
                    )
                seen_ids[algorithm.id] = category_dir

            if category.algorithms:
                categories.append(category)
            else:
                logger.debug("Skipping empty category directory %s", category_dir)

        logger.info(
            "Loaded %d categories, %d algorithms from %s",
            len(categories),
            sum(len(c.algorithms) for c in categories),
            root,
        )
        return categories

    def _load_category(self, category_dir: Path) -> Category:
        name = _default_category_name(category_dir.name)
        meta_path = category_dir / CATEGORY_FILE
        if meta_path.is_file():
            frontmatter, _ = _split_frontmatter(meta_path.read_text(encoding="utf-8"))
            name = _parse_frontmatter(frontmatter).get("name") or name

        algorithms = [
            self.load_algorithm(path, category=category_dir.name)
            for path in sorted(category_dir.glob("*.md"))
            if path.name != CATEGORY_FILE
        ]
        return Category(id=category_dir.name, name=name, algorithms=algorithms)

    def load_algorithm(self, path: Path, *, category: str = "") -> Algorithm:
        """Parse a single algorithm file."""
        path = Path(path)
        raw = path.read_text(encoding="utf-8")

        frontmatter, body = _split_frontmatter(raw)
        meta = _parse_frontmatter(frontmatter)

        title = meta.get("title", "")
        if not title:
            title, body = _extract_title_heading(body)

        algorithm = Algorithm(
            id=meta.get("id") or path.stem,
            title=title or path.stem,
            category=category or path.parent.name,
            code_language=meta.get("language") or self.default_code_language,
        )

        for heading, attrs, content in _split_sections(body):
            key = heading.lower()
            if key in SECTIONS:
                setattr(algorithm, key, content)
            elif key == "code":
                language, code = _extract_code(content)
                algorithm.code = code
                if language:
                    algorithm.code_language = language
            elif key.startswith("explanation:"):
                trigger = heading.split(":", 1)[1].strip()
                algorithm.detailed_explanations.append(_make_explanation(path, trigger, attrs, content))
            else:
                logger.warning("%s: ignoring unknown section %r", path.name, heading)

        return algorithm


def _make_explanation(path: Path, trigger: str, attrs: dict[str, str], content: str) -> DetailedExplanation:
    if not trigger:
        raise CatalogError(f"{path.name}: explanation heading has an empty trigger")
    section = attrs.get("section", "").lower()
    if section not in SECTIONS:
        raise CatalogError(
            f"{path.name}: explanation {trigger!r} needs section= one of {', '.join(SECTIONS)}"
            f" (got {attrs.get('section')!r})"
        )
    return DetailedExplanation(trigger=trigger, section=section, content=content, title=attrs.get("title"))


def _default_category_name(dirname: str) -> str:
    return re.sub(r"[-_]+", " ", dirname).strip().title()


# ---------------------------------------------------------------------------
# YAML frontmatter
# ---------------------------------------------------------------------------

def _split_frontmatter(text: str) -> tuple[str, str]:
    """Split leading YAML frontmatter from body text."""
    if not text.startswith("---"):
        return "", text
    end = text.find("\n---", 3)
    if end == -1:
        return "", text
    frontmatter = text[3:end].strip()
    line_end = text.find("\n", end + 1)
    body = text[line_end + 1:] if line_end != -1 else ""
    return frontmatter, body


def _parse_frontmatter(raw: str) -> dict[str, str]:
    """Minimal YAML-like frontmatter parser (no pyyaml dependency)."""
    result: dict[str, str] = {}
    for line in raw.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        m = re.match(r"^([a-zA-Z_]\w*)\s*:\s*(.*)", line)
        if not m:
            continue

        result[m.group(1).lower()] = _unquote(m.group(2).strip())

    return result


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
        return value[1:-1]
    return value


def _extract_title_heading(body: str) -> tuple[str, str]:
    """Extract a top-level ``# Title`` heading and return (title, remaining_body)."""
    m = re.match(r"^\s*#\s+(.+?)\s*$", body, re.MULTILINE)
    if m:
        return m.group(1).strip(), body[:m.start()] + body[m.end():]
    return "", body


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

_SECTION_RE = re.compile(r"^##(?!#)[ \t]+(.+?)(?:[ \t]*\{([^}]*)\})?[ \t]*$", re.MULTILINE)
_ATTR_RE = re.compile(r"""(\w+)\s*=\s*(?:"([^"]*)"|'([^']*)'|(\S+))""")
_CODE_FENCE_RE = re.compile(r"^```([^\n]*)\n(.*?)^```", re.MULTILINE | re.DOTALL)


def _split_sections(body: str) -> list[tuple[str, dict[str, str], str]]:
    """Split body on ``##`` headings into (heading, attributes, content) triples."""
    matches = list(_SECTION_RE.finditer(body))
    sections: list[tuple[str, dict[str, str], str]] = []
    for idx, m in enumerate(matches):
        content_end = matches[idx + 1].start() if idx + 1 < len(matches) else len(body)
        content = body[m.end():content_end].strip()
        sections.append((m.group(1).strip(), _parse_attrs(m.group(2) or ""), content))
    return sections


def _parse_attrs(raw: str) -> dict[str, str]:
    """Parse ``key=value key="quoted value"`` heading attributes."""
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(raw):
        value = next(g for g in m.groups()[1:] if g is not None)
        attrs[m.group(1).lower()] = value
    return attrs


def _extract_code(content: str) -> tuple[str, str]:
    """Return (language, code) from the first fenced block, or the raw content."""
    m = _CODE_FENCE_RE.search(content)
    if not m:
        return "", content
    return m.group(1).strip(), m.group(2).rstrip("\n")
