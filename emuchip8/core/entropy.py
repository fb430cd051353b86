"""
Entropy source for the ``Cxkk`` instruction.

:class:`EntropySource` wraps a private :class:`random.Random` seeded once at
construction.  With no explicit seed the seed is derived from the wall
clock, so two machines started at different times draw different
sequences.  Passing a seed makes a run reproducible.

Anything with a ``next_byte() -> int`` method can stand in for it, which
is how tests inject a fixed sequence.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Optional

logger = logging.getLogger(__name__)


class EntropySource:
    """Uniform 8-bit random value generator."""

    def __init__(self, seed: Optional[int] = None) -> None:
        if seed is None:
            seed = time.time_ns()
        self.seed: int = seed
        self._rng: random.Random = random.Random(seed)
        logger.debug("EntropySource seeded with %d", seed)

    def next_byte(self) -> int:
        """Return a uniformly distributed value in ``0..255``."""
        return self._rng.randrange(256)

    def __repr__(self) -> str:
        return f"EntropySource(seed={self.seed})"
