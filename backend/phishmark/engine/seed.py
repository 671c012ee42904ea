"""Seed derivation — UUID string → (noise seed, random seed).

The identifier is normalized by dropping separators and braces/URN prefix.
The first 13 hex digits seed the coherent-noise stream, the last 13 seed the
general-purpose stream. 13 hex digits = 52 bits, which is exactly representable
as a double and therefore matches what browser implementations derive.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from phishmark.engine.errors import ValidationError

logger = logging.getLogger(__name__)

# Hex digits taken from each end of the normalized identifier.
SEED_HEX_DIGITS = 13

_URN_PREFIX_RE = re.compile(r"^urn:uuid:", re.IGNORECASE)
_SEPARATORS_RE = re.compile(r"[-{}\s]")
_HEX_RE = re.compile(r"^[0-9a-f]+$")


@dataclass(frozen=True)
class SeedPair:
    noise_seed: int
    random_seed: int
    normalized: str


def normalize_identifier(identifier: str) -> str:
    """Lower-case hex digits of the identifier, separators removed.

    Raises ValidationError when the remainder is not pure hex or is shorter
    than 2 * SEED_HEX_DIGITS.
    """
    if not isinstance(identifier, str):
        raise ValidationError(f"Identifier must be a string, got {type(identifier).__name__}")

    text = _URN_PREFIX_RE.sub("", identifier.strip())
    text = _SEPARATORS_RE.sub("", text).lower()

    if not text or not _HEX_RE.match(text):
        raise ValidationError(f"Identifier {identifier!r} is not a hexadecimal UUID")
    if len(text) < 2 * SEED_HEX_DIGITS:
        raise ValidationError(
            f"Identifier {identifier!r} has {len(text)} hex digits, "
            f"need at least {2 * SEED_HEX_DIGITS}"
        )
    return text


def derive_seeds(identifier: str) -> SeedPair:
    """Map a UUID-shaped identifier to two independent integer seeds."""
    normalized = normalize_identifier(identifier)
    noise_seed = int(normalized[:SEED_HEX_DIGITS], 16)
    random_seed = int(normalized[-SEED_HEX_DIGITS:], 16)
    logger.debug("Seeds for %s: noise=%d random=%d", normalized, noise_seed, random_seed)
    return SeedPair(noise_seed=noise_seed, random_seed=random_seed, normalized=normalized)
