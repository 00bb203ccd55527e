"""
Protocol Configuration.

Collects the knobs of a verifier run: which field to work in, how to seed
the challenge randomness, which degree-bound policy to enforce and whether
to print a round-by-round trace.

Degree-bound policies:
    - per-variable (default): round j is bounded by the largest exponent
      of x_j in the claim. Matches the standard soundness bound.
    - global: every round is bounded by one caller-supplied integer. This
      is weaker whenever variable degrees differ and exists only for
      compatibility with callers that pass a single bound.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .common.field import PrimeField
from .common.randomness import FieldRandomness


PER_VARIABLE_POLICY = "per-variable"
GLOBAL_POLICY = "global"


@dataclass
class ProtocolConfig:
    """
    Configuration for sum-check runs.

    Attributes:
        name: Configuration name for identification
        prime: Field modulus
        seed: Seed for challenge randomness (None for OS entropy)
        degree_bound: None for the per-variable policy, or a global bound
        verbose: Print a round-by-round trace

    Example:
        >>> config = ProtocolConfig(name="replay", seed=7)
        >>> config.bound_policy
        'per-variable'
    """

    name: str = "default"
    prime: int = PrimeField.BLS12_381_SCALAR_PRIME
    seed: Optional[int] = None
    degree_bound: Optional[int] = None
    verbose: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if self.prime < 2:
            raise ValueError("prime must be at least 2")
        if self.degree_bound is not None and self.degree_bound < 0:
            raise ValueError("degree_bound must be non-negative")

    @property
    def field(self) -> PrimeField:
        return PrimeField(self.prime)

    @property
    def bound_policy(self) -> str:
        return PER_VARIABLE_POLICY if self.degree_bound is None else GLOBAL_POLICY

    def create_rng(self) -> FieldRandomness:
        """Fresh randomness source for one run."""
        return FieldRandomness(self.field, seed=self.seed)

    def summary(self) -> str:
        """Return configuration summary string."""
        bound = "per-variable table" if self.degree_bound is None else f"global <= {self.degree_bound}"
        return (
            f"ProtocolConfig '{self.name}':\n"
            f"  Field: Z_p, p has {self.prime.bit_length()} bits\n"
            f"  Seed: {self.seed}\n"
            f"  Degree bound: {bound}\n"
            f"  Verbose: {self.verbose}"
        )


def create_bls12_381_config(seed: Optional[int] = None) -> ProtocolConfig:
    """BLS12-381 scalar field (~255 bits); soundness error is negligible."""
    return ProtocolConfig(name="bls12-381", prime=PrimeField.BLS12_381_SCALAR_PRIME, seed=seed)


def create_goldilocks_config(seed: Optional[int] = None) -> ProtocolConfig:
    """Goldilocks field (2^64 - 2^32 + 1)."""
    return ProtocolConfig(name="goldilocks", prime=PrimeField.GOLDILOCKS_PRIME, seed=seed)


def create_small_field_config(seed: Optional[int] = None) -> ProtocolConfig:
    """
    Tiny field (p = 97) where a cheating prover wins often enough to measure.

    Useful for soundness experiments, useless for anything else.
    """
    return ProtocolConfig(name="small", prime=PrimeField.SMALL_TEST_PRIME, seed=seed)
