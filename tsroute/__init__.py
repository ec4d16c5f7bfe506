"""Least-cost routing over triangulated elevation models, with GPX, KML and cache I/O."""

__version__ = "1.0.0"