"""Showfinder: TV show search and cross-language candidate ranking."""

from .__version__ import __version__

__all__ = ["__version__"]
