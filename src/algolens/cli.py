"""algolens CLI entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from algolens.catalog.loader import CatalogError, CatalogLoader
from algolens.renderer.html_renderer import HTMLRenderer

logger = logging.getLogger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("catalog_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(path_type=Path), required=True, help="Output HTML path")
@click.option("--title", type=str, default=None, help="Override page title")
@click.option("--dark-mode", is_flag=True, help="Use the dark theme")
@click.option(
    "--algorithm",
    "-a",
    "algorithm_ids",
    multiple=True,
    help="Only render the given algorithm id (repeatable)",
)
@click.option(
    "--default-language",
    default="go",
    show_default=True,
    help="Language for code fences and code sections without a tag",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    catalog_dir: Path,
    output: Path,
    title: str | None,
    dark_mode: bool,
    algorithm_ids: tuple[str, ...],
    default_language: str,
    verbose: bool,
) -> None:
    """Render an algorithm catalog directory into a single self-contained HTML file."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        categories = CatalogLoader(default_code_language=default_language).load(catalog_dir)
    except CatalogError as exc:
        raise click.ClickException(str(exc)) from exc

    if algorithm_ids:
        known = {a.id for c in categories for a in c.algorithms}
        missing = [a for a in algorithm_ids if a not in known]
        if missing:
            raise click.BadParameter(
                f"Unknown algorithm id(s): {', '.join(missing)}", param_hint="--algorithm"
            )

    renderer = HTMLRenderer(default_code_language=default_language)
    html = renderer.render(
        categories,
        title_override=title,
        dark_mode=dark_mode,
        selected=algorithm_ids or None,
    )

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    logger.debug("Wrote %d bytes to %s", len(html), output)

    click.echo(f"Rendered: {output}")


if __name__ == "__main__":  # pragma: no cover
    main()
