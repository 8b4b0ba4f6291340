"""tmx2map/errors.py -- Conversion error hierarchy.

Every error aborts the conversion. Each raise site passes its own exit code so
the CLI can report a distinct status per failure cause.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for every failure of a TMX -> map conversion."""

    exit_code = 1

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class MapIOError(ConversionError):
    """Input could not be read or output could not be written."""

    exit_code = 24


class FormatError(ConversionError):
    """The TMX text does not match the expected structure."""

    exit_code = 4


class MissingTagError(FormatError):
    """The stream ended before a required tag was found."""

    exit_code = 7


class TmxAttributeError(FormatError):
    """A required attribute is absent or not a usable integer."""

    exit_code = 8


class MissingAttributeError(TmxAttributeError):
    exit_code = 8


class InvalidValueError(TmxAttributeError):
    exit_code = 20


class UnknownEventError(FormatError):
    """An object's gid does not index the trigger table."""

    exit_code = 26


class CapacityError(ConversionError):
    """The object group holds more objects than the engine supports."""

    exit_code = 23


class EndOfInput(Exception):
    """Raised by the line scanner when the stream is exhausted."""
