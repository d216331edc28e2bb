"""Type aliases for codec inputs."""

import typing


Json = str | bytes | bytearray
"""Type alias for a raw JSON payload.

A payload can be provided as a string, bytes, or bytearray.
"""

Target = typing.Any
"""Type alias for a decode target.

A target is either a resource instance or a list of resources.
"""
