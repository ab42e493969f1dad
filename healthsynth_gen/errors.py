from __future__ import annotations


class HealthSynthError(Exception):
    """Base class for errors raised by healthsynth_gen."""


class InvalidInputError(HealthSynthError, ValueError):
    """An input lies outside the documented domain (NaT dates, bad enums, bad seeds)."""


class BundleFormatError(InvalidInputError):
    """A serialized bundle document is malformed."""
