"""Seeded random generators for noise lattices and grid randomization."""

from __future__ import annotations

import hashlib

import numpy as np

_U64_MASK = (1 << 64) - 1


def stream_seed(seed: int, *labels: str | int) -> int:
    """Hash a base seed and a label path into an independent 64-bit seed.

    The same (seed, labels) always maps to the same value, so every consumer
    of randomness gets its own reproducible stream, e.g. one per noise octave.
    """

    parts = ["shorewaves", str(int(seed) & _U64_MASK), *(str(label) for label in labels)]
    digest = hashlib.blake2b(":".join(parts).encode("utf-8"), digest_size=8, person=b"shorewav").digest()
    return int.from_bytes(digest, byteorder="big", signed=False)


def generator(seed: int, *labels: str | int) -> np.random.Generator:
    return np.random.Generator(np.random.PCG64(stream_seed(seed, *labels)))
