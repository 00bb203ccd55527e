"""
Injectable randomness for protocol runs.

Each verifier run owns one FieldRandomness. Nothing here touches the
module-level `random` state, so two runs never share draws and a seeded
run replays exactly. Unseeded sources draw from the operating system
CSPRNG; challenges must stay unpredictable to the prover.
"""

from __future__ import annotations
from typing import Optional
import random

from .field import PrimeField, FieldElement


class FieldRandomness:
    """
    Uniform randomness over a prime field.

    Example:
        >>> field = PrimeField(97)
        >>> rng = FieldRandomness(field, seed=42)
        >>> rng.element() == FieldRandomness(field, seed=42).element()
        True
    """

    def __init__(self, field: PrimeField, seed: Optional[int] = None):
        self.field = field
        self.seed = seed
        self._random = random.SystemRandom() if seed is None else random.Random(seed)

    def __repr__(self) -> str:
        return f"FieldRandomness(Z_{self.field.prime}, seed={self.seed})"

    def integer(self, modulus: int) -> int:
        """Uniform random integer in [0, modulus)."""
        if modulus < 1:
            raise ValueError("modulus must be positive")
        return self._random.randrange(modulus)

    def element(self) -> FieldElement:
        """Uniform random field element."""
        return self.field.element(self.integer(self.field.prime))

    def spawn(self) -> 'FieldRandomness':
        """
        Derive an independent child source (one per protocol run).

        Children of a seeded source are seeded from it so experiments replay;
        children of an unseeded source are unseeded as well.
        """
        if self.seed is None:
            return FieldRandomness(self.field)
        return FieldRandomness(self.field, seed=self._random.getrandbits(64))
