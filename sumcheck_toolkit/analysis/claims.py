"""
Predefined and Random Claims.

Fixed claims reproduce the worked examples:

    EXAMPLE:        g = 2*x0^3 + x0*x2 + x1*x2              (sum 12)
    FOUR_VARIABLE:  g = 2*x0^3 + x0*x2 + x1*x2 + x2*x3

Random claims drive completeness fuzzing: pick a variable count, a
per-variable degree cap and a handful of terms with random non-zero
coefficients.
"""

from __future__ import annotations
from typing import List, Tuple

from ..common.field import PrimeField, FieldElement, random_field_elements
from ..common.polynomial import MultivariatePolynomial, Term
from ..common.randomness import FieldRandomness


EXAMPLE_SUM = 12


def create_example_claim(field: PrimeField) -> MultivariatePolynomial:
    """g = 2*x0^3 + x0*x2 + x1*x2 over 3 variables."""
    return MultivariatePolynomial.from_coefficients(
        field, 3,
        [2, 1, 1],
        [
            Term.from_pairs([(0, 3)]),
            Term.from_pairs([(0, 1), (2, 1)]),
            Term.from_pairs([(1, 1), (2, 1)]),
        ],
    )


def create_four_variable_claim(field: PrimeField) -> MultivariatePolynomial:
    """The example claim with an extra x3*x2 term over 4 variables."""
    return MultivariatePolynomial.from_coefficients(
        field, 4,
        [2, 1, 1, 1],
        [
            Term.from_pairs([(0, 3)]),
            Term.from_pairs([(0, 1), (2, 1)]),
            Term.from_pairs([(1, 1), (2, 1)]),
            Term.from_pairs([(3, 1), (2, 1)]),
        ],
    )


def random_claim(field: PrimeField, rng: FieldRandomness, num_vars: int,
                 max_degree: int, max_terms: int) -> MultivariatePolynomial:
    """
    Random claim with up to `max_terms` non-zero terms.

    Each term picks every variable's exponent uniformly from
    [0, max_degree]. Colliding terms are merged by the polynomial
    constructor, so the final count can be lower.
    """
    if num_vars < 1 or max_degree < 0 or max_terms < 1:
        raise ValueError("num_vars and max_terms must be positive, max_degree non-negative")

    num_terms = 1 + rng.integer(max_terms)
    coefficients = random_field_elements(field, rng, num_terms, exclude_zero=True)
    pairs: List[Tuple[FieldElement, Term]] = []
    for coeff in coefficients:
        powers = [(var, rng.integer(max_degree + 1)) for var in range(num_vars)]
        pairs.append((coeff, Term.from_pairs(powers)))
    return MultivariatePolynomial(field, num_vars, pairs)


def random_fuzz_claim(field: PrimeField, rng: FieldRandomness, max_vars: int = 8,
                      max_degree: int = 5, max_terms: int = 15) -> MultivariatePolynomial:
    """Random claim with variable count in [1, max_vars] and degree cap in [1, max_degree]."""
    num_vars = 1 + rng.integer(max_vars)
    degree = 1 + rng.integer(max_degree)
    return random_claim(field, rng, num_vars, degree, max_terms)
