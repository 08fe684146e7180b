"""Versioned blog index publishing and file-backed caching."""

__version__ = "0.1.0"
