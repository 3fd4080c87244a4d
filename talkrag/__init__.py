"""Grounded question answering over a talk-transcript corpus."""

__version__ = "1.0.0"
