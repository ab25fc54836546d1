"""
paramfinder: hidden parameter discovery for web targets.

This package synthesizes candidate query, header and body parameters into
real HTTP requests (JSON, URL-encoded and multipart bodies included) while
keeping the rest of the base request intact.
"""

from importlib.metadata import version

__version__ = version("paramfinder")
__all__ = ["__version__"]
