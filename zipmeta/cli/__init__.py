"""
CLI package for zipmeta.

Provides command-line interface for extracting firmware build metadata
from zip distribution packages.
"""
from .app import app

__all__ = ["app"]
