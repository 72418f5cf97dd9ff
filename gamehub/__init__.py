"""GameHub Insight backend: game catalog, favorites and AI recommendations."""

__version__ = "0.1.0"
