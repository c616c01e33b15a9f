"""SVG path morphing engine."""

__version__ = "0.1.0"
