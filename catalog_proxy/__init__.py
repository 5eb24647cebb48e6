"""Caching proxy in front of a movie/TV metadata provider."""

__version__ = "0.1.0"
