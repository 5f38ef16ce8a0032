from __future__ import annotations
import random
import uuid
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """
    All randomness the engine needs, behind one seedable object.
    Pass a seed (or a preconfigured random.Random) for repeatable games.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random(seed)

    def uniform(self, lo: float, hi: float) -> float:
        return self._rng.uniform(lo, hi)

    def chance(self) -> float:
        """Float in [0, 1)."""
        return self._rng.random()

    def randint(self, lo: int, hi: int) -> int:
        return self._rng.randint(lo, hi)

    def choice(self, items: Sequence[T]) -> T:
        return self._rng.choice(items)

    def new_id(self) -> str:
        return str(uuid.UUID(int=self._rng.getrandbits(128), version=4))
