"""
Boolean hypercube enumeration.

Index i in [0, 2^n) maps to the n-bit vector of its binary digits,
most significant bit first:

    decode(0b110, 3) -> (1, 1, 0)
    decode(0b001, 3) -> (0, 0, 1)

The prover's summation and the brute-force reference sum both go through
decode(), so they agree on which variable each bit drives.
"""

from __future__ import annotations
from typing import Iterator, List

from ..common.field import PrimeField, FieldElement
from ..common.polynomial import MultivariatePolynomial


def decode(index: int, length: int, field: PrimeField) -> List[FieldElement]:
    """
    Decode an integer into its boolean point of the given length.

    Args:
        index: Integer in [0, 2^length)
        length: Number of coordinates
        field: Field the 0/1 coordinates live in

    Raises:
        ValueError: If index is outside [0, 2^length)
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    if not 0 <= index < (1 << length):
        raise ValueError(f"index {index} out of range for {length}-bit hypercube")

    zero, one = field.zero(), field.one()
    return [one if (index >> (length - 1 - c)) & 1 else zero for c in range(length)]


def hypercube_points(length: int, field: PrimeField) -> Iterator[List[FieldElement]]:
    """Yield every point of {0,1}^length in index order."""
    for index in range(1 << length):
        yield decode(index, length, field)


def hypercube_sum(poly: MultivariatePolynomial) -> FieldElement:
    """
    Brute-force sum of poly over {0,1}^num_vars.

    Costs 2^v full evaluations; this is the work the protocol saves the
    verifier, kept here as the reference for tests and the CLI default.
    """
    total = poly.field.zero()
    for point in hypercube_points(poly.num_vars, poly.field):
        total = total + poly.evaluate(point)
    return total
