"""Tests for identifier normalization and seed derivation."""

from __future__ import annotations

import pytest

from phishmark.engine.errors import ValidationError
from phishmark.engine.seed import SEED_HEX_DIGITS, derive_seeds, normalize_identifier


def test_worked_example(sample_uuid):
    seeds = derive_seeds(sample_uuid)
    assert seeds.normalized == "123e4567e89b12d3a456426614174000"
    assert seeds.noise_seed == int("123e4567e89b1", 16) == 320938587359665
    assert seeds.random_seed == int("6426614174000", 16) == 1761856051429376


def test_derivation_is_stable(sample_uuids):
    for u in sample_uuids:
        assert derive_seeds(u) == derive_seeds(u)


@pytest.mark.parametrize(
    "variant",
    [
        "123E4567-E89B-12D3-A456-426614174000",
        "{123e4567-e89b-12d3-a456-426614174000}",
        "urn:uuid:123e4567-e89b-12d3-a456-426614174000",
        "123e4567e89b12d3a456426614174000",
        "  123e4567-e89b-12d3-a456-426614174000\n",
    ],
)
def test_equivalent_spellings(variant, sample_uuid):
    assert derive_seeds(variant) == derive_seeds(sample_uuid)


def test_seeds_fit_52_bits(sample_uuids):
    for u in sample_uuids:
        seeds = derive_seeds(u)
        assert 0 <= seeds.noise_seed < 2 ** (4 * SEED_HEX_DIGITS)
        assert 0 <= seeds.random_seed < 2 ** (4 * SEED_HEX_DIGITS)


def test_single_digit_change_changes_a_seed(sample_uuid):
    base = derive_seeds(sample_uuid)
    hex_only = base.normalized
    sliced = list(range(SEED_HEX_DIGITS)) + list(range(len(hex_only) - SEED_HEX_DIGITS, len(hex_only)))
    for i in sliced:
        digit = hex_only[i]
        flipped = "0" if digit != "0" else "1"
        other = derive_seeds(hex_only[:i] + flipped + hex_only[i + 1:])
        assert (other.noise_seed, other.random_seed) != (base.noise_seed, base.random_seed)


class TestValidation:
    def test_too_short(self):
        with pytest.raises(ValidationError, match="hex digits"):
            normalize_identifier("123e4567-e89b-12d3")

    def test_exactly_26_digits_accepted(self):
        assert len(normalize_identifier("a" * 26)) == 26

    def test_non_hex(self):
        with pytest.raises(ValidationError):
            derive_seeds("not-a-uuid-at-all-zzzzzzzzzzzzzzzzzzzzzz")

    def test_empty(self):
        with pytest.raises(ValidationError):
            derive_seeds("")

    def test_non_string(self):
        with pytest.raises(ValidationError):
            derive_seeds(1234)  # type: ignore[arg-type]

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            derive_seeds("xyz")
