"""Deterministic seed derivation for randomized algorithms.

Randomized routines never touch the global ``random`` state. A master seed is
hashed together with component identifiers (for example a trial index) so
every trial draws from its own reproducible stream, independent of the order
in which trials run.
"""

from __future__ import annotations

import hashlib
import random
from typing import Any, Optional


def derive_seed(master_seed: Optional[int], *components: Any) -> Optional[int]:
    """Derive a positive 32-bit seed from a master seed and component ids.

    Args:
        master_seed: Master seed, or None for non-deterministic behaviour.
        *components: Identifiers of the consumer, e.g. ``("karger", 3)``.

    Returns:
        Derived seed, or None when ``master_seed`` is None.
    """
    if master_seed is None:
        return None

    seed_input = f"{master_seed}:" + ":".join(str(c) for c in components)
    digest = hashlib.sha256(seed_input.encode()).digest()
    return int.from_bytes(digest[:4], byteorder="big") & 0x7FFFFFFF


def make_rng(master_seed: Optional[int], *components: Any) -> random.Random:
    """Return a ``random.Random`` seeded from ``derive_seed``.

    Unseeded (OS entropy) when ``master_seed`` is None.
    """
    rng = random.Random()
    derived = derive_seed(master_seed, *components)
    if derived is not None:
        rng.seed(derived)
    return rng
