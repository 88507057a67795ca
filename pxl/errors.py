"""Exceptions raised by the pxl library.

The library never prints or exits; the CLI turns these into ``ERROR:`` lines.
"""


class PxlError(Exception):
    """Base class for every error raised by pxl."""


class OutOfBoundsError(PxlError, IndexError):
    """A pixel coordinate falls outside its buffer."""


class BufferSizeError(PxlError, ValueError):
    """A buffer's length does not match its declared dimensions."""


class ValidationError(PxlError, ValueError):
    """An enum value, identifier, or serialized structure is invalid."""
