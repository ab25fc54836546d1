"""
paramfinder CLI package.
"""

from paramfinder.cli.main import app, main

__all__ = ["app", "main"]
