"""prismark: Prism-style syntax highlighting filter for rendered HTML."""

__version__ = "0.3.0"
