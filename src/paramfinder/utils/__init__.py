"""
paramfinder utilities package.

The HTTP transport is not re-exported here; import
``paramfinder.utils.http_client`` directly.
"""

from paramfinder.utils.once import OnceCell

__all__ = ["OnceCell"]
