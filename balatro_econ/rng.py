"""Shared random source.

Every generator in the package draws from one ``random.Random`` instance
unless a caller passes its own. Nothing here guarantees determinism; tests
that need repeatability seed the shared source or hand in their own.
"""

from __future__ import annotations

import random
from typing import Optional

_shared = random.Random()


def get_rng(rng: Optional[random.Random] = None) -> random.Random:
    """Return ``rng`` if given, else the shared source."""
    return rng if rng is not None else _shared


def seed(value) -> None:
    _shared.seed(value)
