"""
Common utilities for the Sum-Check toolkit.

This module provides:
    - Finite field arithmetic (PrimeField, FieldElement)
    - Injectable randomness (FieldRandomness)
    - Polynomial representations (Term, MultivariatePolynomial,
      UnivariatePolynomial) and a text parser for claims
"""

from .field import PrimeField, FieldElement, field_for_preset
from .randomness import FieldRandomness
from .polynomial import (
    Term,
    MultivariatePolynomial,
    UnivariatePolynomial,
    parse_polynomial,
)

__all__ = [
    "PrimeField",
    "FieldElement",
    "field_for_preset",
    "FieldRandomness",
    "Term",
    "MultivariatePolynomial",
    "UnivariatePolynomial",
    "parse_polynomial",
]
