"""Engine error types."""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for errors raised by the generation engine."""


class ValidationError(GeneratorError, ValueError):
    """Identifier or canvas size rejected before any rendering starts."""


class AlreadyRenderedError(GeneratorError, RuntimeError):
    """A generator instance produces exactly one image."""
