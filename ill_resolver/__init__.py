"""Identifier resolver for interlibrary-loan request forms."""

__version__ = "0.1.0"
