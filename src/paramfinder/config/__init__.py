"""
paramfinder configuration module.
"""

from paramfinder.config.settings import HTTPConfig, MinerConfig, ParamFinderSettings

__all__ = [
    "HTTPConfig",
    "MinerConfig",
    "ParamFinderSettings",
]
