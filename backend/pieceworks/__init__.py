"""Pieceworks — parameterized SVG asset generators."""

__version__ = "1.0.0"
