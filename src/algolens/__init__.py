"""algolens: render an authored catalog of algorithm explanations to HTML."""

__version__ = "0.1.0"
