"""Layout registry — every curve layout is a standalone function registered via decorator.

Usage:
    @layout(kind=LayoutKind.GRID, description="Seeds on a uniform lattice")
    def grid_curves(ctx: DrawContext, angle_offset: float) -> int:
        ...
        return curves_drawn

Adding a layout = creating one module under phishmark.engine.layouts with the
decorator and a new LayoutKind member. The pipeline picks the kind by index.
"""

from __future__ import annotations

import enum
import importlib
import logging
import pkgutil
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from phishmark.engine.layouts.drawing import DrawContext

logger = logging.getLogger(__name__)

LAYOUT_PACKAGE = "phishmark.engine.layouts"


class LayoutKind(enum.IntEnum):
    GRID = 0
    RANDOM = 1
    POISSON = 2
    SPACED = 3


LayoutFn = Callable[["DrawContext", float], int]


@dataclass
class LayoutSpec:
    kind: LayoutKind
    fn: LayoutFn
    description: str = ""

    @property
    def name(self) -> str:
        return self.kind.name.lower()


class LayoutRegistry:
    """Singleton registry of curve layouts, keyed by LayoutKind."""

    def __init__(self) -> None:
        self._layouts: dict[LayoutKind, LayoutSpec] = {}

    def register(self, spec: LayoutSpec) -> None:
        if spec.kind in self._layouts:
            raise ValueError(f"Duplicate layout: {spec.kind.name}")
        self._layouts[spec.kind] = spec
        logger.debug("Registered layout %s", spec.kind.name)

    def get(self, kind: LayoutKind) -> LayoutSpec:
        return self._layouts[kind]

    def all(self) -> list[LayoutSpec]:
        return sorted(self._layouts.values(), key=lambda s: s.kind)

    @property
    def count(self) -> int:
        return len(self._layouts)


# Module-level singleton
_registry = LayoutRegistry()


def get_registry() -> LayoutRegistry:
    return _registry


def layout(*, kind: LayoutKind, description: str = ""):
    """Decorator to register a layout function."""

    def decorator(fn: LayoutFn):
        _registry.register(LayoutSpec(kind=kind, fn=fn, description=description))
        return fn

    return decorator


def load_layouts() -> LayoutRegistry:
    """Import every layout module so @layout decorators fire. Safe to call repeatedly."""
    package = importlib.import_module(LAYOUT_PACKAGE)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{LAYOUT_PACKAGE}.{module_name}")
    return _registry
