"""Schema analyser - structural metadata extraction for MySQL databases."""

__version__ = "0.1.0"
