"""Tests for the layout registry."""

import pytest

from phishmark.engine.registry import LayoutKind, LayoutRegistry, LayoutSpec, get_registry, load_layouts


def _noop(ctx, angle_offset) -> int:
    return 0


def test_register_and_get():
    reg = LayoutRegistry()
    spec = LayoutSpec(kind=LayoutKind.GRID, fn=_noop)
    reg.register(spec)
    assert reg.get(LayoutKind.GRID) is spec
    assert reg.count == 1


def test_duplicate_rejected():
    reg = LayoutRegistry()
    reg.register(LayoutSpec(kind=LayoutKind.SPACED, fn=_noop))
    with pytest.raises(ValueError, match="Duplicate"):
        reg.register(LayoutSpec(kind=LayoutKind.SPACED, fn=_noop))


def test_all_sorted_by_kind():
    reg = LayoutRegistry()
    for kind in (LayoutKind.SPACED, LayoutKind.GRID, LayoutKind.POISSON):
        reg.register(LayoutSpec(kind=kind, fn=_noop))
    assert [s.kind for s in reg.all()] == [LayoutKind.GRID, LayoutKind.POISSON, LayoutKind.SPACED]


def test_spec_name():
    assert LayoutSpec(kind=LayoutKind.RANDOM, fn=_noop).name == "random"


def test_builtin_layouts_register():
    reg = load_layouts()
    assert reg is get_registry()
    assert reg.count == len(LayoutKind) == 4
    names = [s.fn.__name__ for s in reg.all()]
    assert names == ["grid_curves", "random_curves", "poisson_curves", "spaced_curves"]


def test_load_is_idempotent():
    load_layouts()
    assert load_layouts().count == 4


def test_kind_values_are_draw_indices():
    assert [int(k) for k in LayoutKind] == [0, 1, 2, 3]
