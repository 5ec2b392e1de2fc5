"""Command-line interface for arpo."""

from .main import cli

__all__ = ["cli"]
