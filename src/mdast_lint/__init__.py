"""Style-checking rules for Markdown syntax trees."""
__version__ = "0.1.0"
