"""phishmark generative engine — identifier in, draw intents out."""

from phishmark.engine.context import GeneratorState, build_state
from phishmark.engine.errors import AlreadyRenderedError, GeneratorError, ValidationError
from phishmark.engine.pipeline import ImageGenerator, generate, inspect, render_svg
from phishmark.engine.registry import LayoutKind, get_registry, layout
from phishmark.engine.surface import RecordingSurface, SurfaceBase

__all__ = [
    "GeneratorState",
    "build_state",
    "GeneratorError",
    "ValidationError",
    "AlreadyRenderedError",
    "ImageGenerator",
    "generate",
    "inspect",
    "render_svg",
    "LayoutKind",
    "get_registry",
    "layout",
    "RecordingSurface",
    "SurfaceBase",
]
