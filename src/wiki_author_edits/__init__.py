"""Per-author edit counts from MediaWiki XML dumps."""

__version__ = "0.1.0"
