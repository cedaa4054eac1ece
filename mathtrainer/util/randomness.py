from __future__ import annotations

"""Randomness helpers: seedable generators and opaque identifiers."""

import os
import random
import string
import time
from typing import Callable, Optional

_ID_ALPHABET = string.digits + string.ascii_lowercase


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Return a dedicated RNG.

    Uses ``seed`` when given, else the SEED env var if it parses as an int,
    else OS entropy.
    """
    if seed is None:
        env = os.environ.get("SEED")
        if env is not None:
            try:
                seed = int(env)
            except ValueError:
                seed = None
    return random.Random(seed)


def new_id(rng: random.Random, prefix: str, clock: Callable[[], float] = time.time) -> str:
    """Timestamp plus a 9-char base-36 suffix, e.g. ``p_1718000000000_k3j9x0a1b``."""
    millis = int(clock() * 1000)
    suffix = "".join(rng.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}_{millis}_{suffix}"
