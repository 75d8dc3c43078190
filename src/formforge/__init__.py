"""FormForge - natural-language form generation."""

__version__ = "0.1.0"
