"""
Sum-Check Toolkit
=================

An implementation of the Sum-Check interactive proof: a prover convinces a
verifier that a claimed value equals the sum of a multivariate polynomial
over the boolean hypercube, with verifier work linear in the number of
variables instead of exponential.

Modules:
    - protocol: Prover round-reduction engine, verifier driver, hypercube enumeration
    - analysis: Completeness fuzzing and soundness experiments
    - common: Shared utilities (field arithmetic, randomness, polynomials)
    - config: Protocol configuration presets

Quick Start:
    >>> from sumcheck_toolkit.common import PrimeField, parse_polynomial
    >>> from sumcheck_toolkit.protocol import verify
    >>> field = PrimeField(PrimeField.BLS12_381_SCALAR_PRIME)
    >>> g = parse_polynomial("2*x0^3 + x0*x2 + x1*x2", field)
    >>> verify(g, 12).accepted
    True
"""

__version__ = "0.1.0"

from . import common
from . import protocol
from . import analysis
