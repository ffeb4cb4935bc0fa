"""Command line interface for LumaMap."""

from .main import cli, main

__all__ = ["cli", "main"]
