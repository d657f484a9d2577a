"""Acquire a working LibSass binding, building it from source when needed."""

from .cli import main

__all__ = ["main"]
