"""
Sum-Check Protocol Engine

Key Components:
    - Prover: Round-reduction engine producing one univariate polynomial per round
    - Verifier: Round driver with degree, consistency and final oracle checks
    - decode / hypercube_sum: Shared boolean hypercube enumeration

Usage:
    >>> from sumcheck_toolkit.common import PrimeField, FieldRandomness, parse_polynomial
    >>> from sumcheck_toolkit.protocol import verify
    >>>
    >>> field = PrimeField(PrimeField.BLS12_381_SCALAR_PRIME)
    >>> g = parse_polynomial("2*x0^3 + x0*x2 + x1*x2", field)
    >>> verify(g, 12, rng=FieldRandomness(field, seed=1)).accepted
    True
"""

from .hypercube import decode, hypercube_points, hypercube_sum
from .prover import Prover
from .verifier import (
    Verifier,
    VerifierState,
    VerificationResult,
    RoundRecord,
    max_degrees,
    resolve_degree_bounds,
    verify,
    run_protocol,
)

__all__ = [
    "decode",
    "hypercube_points",
    "hypercube_sum",
    "Prover",
    "Verifier",
    "VerifierState",
    "VerificationResult",
    "RoundRecord",
    "max_degrees",
    "resolve_degree_bounds",
    "verify",
    "run_protocol",
]
