"""
Polynomial Representations for the Sum-Check Protocol.

The protocol handles two kinds of polynomial:
    - The claim: a sparse multivariate polynomial g(X_0, ..., X_{v-1})
      over a prime field, stored as (coefficient, term) pairs.
    - Round polynomials: sparse univariate polynomials h_j(X_j) that the
      prover sends once per round.

Example claim:
    g = 2*x0^3 + x0*x2 + x1*x2

    Represented as:
        MultivariatePolynomial(field, 3, [
            (2, Term.from_pairs([(0, 3)])),
            (1, Term.from_pairs([(0, 1), (2, 1)])),
            (1, Term.from_pairs([(1, 1), (2, 1)])),
        ])

    Its sum over {0,1}^3 is 12.

Variables are 0-indexed throughout. A term mentioning variable i >= v is
rejected at construction with MalformedClaimError.
"""

from __future__ import annotations
from dataclasses import dataclass, field as dataclass_field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union
import re

from .field import PrimeField, FieldElement
from ..errors import MalformedClaimError


@dataclass(frozen=True)
class Term:
    """
    A monomial without its coefficient: a product of variable powers.

    Stored as a sorted tuple of (variable_index, exponent) pairs with
    positive exponents. The empty term is the constant monomial 1.

    Example:
        >>> term = Term.from_pairs([(2, 1), (0, 1)])
        >>> print(term)
        x0*x2
        >>> term.degree
        2
    """
    powers: Tuple[Tuple[int, int], ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[int, int]]) -> 'Term':
        """
        Build a term from (variable, exponent) pairs.

        Repeated variables are merged by adding exponents, zero exponents
        are dropped.
        """
        merged: Dict[int, int] = {}
        for var, power in pairs:
            if var < 0:
                raise MalformedClaimError(f"Variable index must be non-negative, got {var}")
            if power < 0:
                raise MalformedClaimError(f"Exponent must be non-negative, got {power} for x{var}")
            merged[var] = merged.get(var, 0) + power
        return cls(tuple(sorted((v, p) for v, p in merged.items() if p > 0)))

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return iter(self.powers)

    def __len__(self) -> int:
        return len(self.powers)

    @property
    def degree(self) -> int:
        """Total degree (sum of exponents)."""
        return sum(power for _, power in self.powers)

    @property
    def is_constant(self) -> bool:
        return not self.powers

    @property
    def max_variable(self) -> int:
        """Largest variable index mentioned, or -1 for the constant term."""
        if not self.powers:
            return -1
        return self.powers[-1][0]

    def power_of(self, var: int) -> int:
        """Exponent of `var` in this term (0 if absent)."""
        for v, p in self.powers:
            if v == var:
                return p
        return 0

    def evaluate(self, point: Sequence[FieldElement], one: FieldElement) -> FieldElement:
        """Product of point[var] ** power over this term."""
        product = one
        for var, power in self.powers:
            product = product * point[var] ** power
        return product

    def __str__(self) -> str:
        if not self.powers:
            return "1"
        parts = []
        for var, power in self.powers:
            parts.append(f"x{var}" if power == 1 else f"x{var}^{power}")
        return "*".join(parts)


@dataclass
class MultivariatePolynomial:
    """
    A sparse multivariate polynomial over a prime field.

    Construction normalizes the term list: duplicate terms are combined,
    zero coefficients are removed and terms are sorted. Construction fails
    with MalformedClaimError if any term references a variable index
    outside [0, num_vars).

    Attributes:
        field: The prime field of the coefficients
        num_vars: Declared variable count v
        terms: List of (coefficient, Term) pairs
    """
    field: PrimeField
    num_vars: int
    terms: List[Tuple[FieldElement, Term]] = dataclass_field(default_factory=list)

    def __post_init__(self):
        if self.num_vars < 0:
            raise MalformedClaimError(f"num_vars must be non-negative, got {self.num_vars}")

        combined: Dict[Term, FieldElement] = {}
        for coeff, term in self.terms:
            if term.max_variable >= self.num_vars:
                raise MalformedClaimError(
                    f"Term {term} references x{term.max_variable}, "
                    f"but the polynomial has only {self.num_vars} variables"
                )
            coeff = self.field.coerce(coeff)
            combined[term] = combined.get(term, self.field.zero()) + coeff

        self.terms = [
            (coeff, term)
            for term, coeff in sorted(combined.items(), key=lambda item: (item[0].degree, item[0].powers))
            if not coeff.is_zero()
        ]

    @classmethod
    def from_coefficients(cls, field: PrimeField, num_vars: int,
                          coefficients: Sequence[Union[FieldElement, int]],
                          terms: Sequence[Term]) -> 'MultivariatePolynomial':
        """
        Pair up parallel coefficient and term lists.

        Raises:
            MalformedClaimError: If the two lists differ in length
        """
        if len(coefficients) != len(terms):
            raise MalformedClaimError(
                f"coefficient length: {len(coefficients)}, terms: {len(terms)} don't match"
            )
        return cls(field, num_vars, list(zip(coefficients, terms)))

    def __iter__(self) -> Iterator[Tuple[FieldElement, Term]]:
        return iter(self.terms)

    @property
    def num_terms(self) -> int:
        return len(self.terms)

    @property
    def degree(self) -> int:
        """Total degree of the polynomial."""
        if not self.terms:
            return 0
        return max(term.degree for _, term in self.terms)

    def variable_degrees(self) -> List[int]:
        """Maximum exponent of each variable across all terms."""
        degrees = [0] * self.num_vars
        for _, term in self.terms:
            for var, power in term:
                if power > degrees[var]:
                    degrees[var] = power
        return degrees

    def evaluate(self, point: Sequence[Union[FieldElement, int]]) -> FieldElement:
        """
        Evaluate at a full point of length num_vars.

        Raises:
            ValueError: If the point has the wrong length
        """
        if len(point) != self.num_vars:
            raise ValueError(f"Expected a point with {self.num_vars} coordinates, got {len(point)}")
        values = [self.field.coerce(x) for x in point]
        one = self.field.one()
        total = self.field.zero()
        for coeff, term in self.terms:
            total = total + coeff * term.evaluate(values, one)
        return total

    def __str__(self) -> str:
        if not self.terms:
            return "0"
        parts = []
        for coeff, term in self.terms:
            if term.is_constant:
                parts.append(str(coeff))
            elif coeff.is_one():
                parts.append(str(term))
            else:
                parts.append(f"{coeff}*{term}")
        return " + ".join(parts)


@dataclass
class UnivariatePolynomial:
    """
    A sparse univariate polynomial: degree -> coefficient.

    Zero coefficients are never stored. The zero polynomial has degree 0.

    Example:
        >>> field = PrimeField(97)
        >>> h = UnivariatePolynomial.from_sparse(field, [(0, 1), (3, 2)])
        >>> h.degree
        3
        >>> h.evaluate(field.element(2))
        FieldElement(17, mod 97)
    """
    field: PrimeField
    coefficients: Dict[int, FieldElement] = dataclass_field(default_factory=dict)

    def __post_init__(self):
        cleaned: Dict[int, FieldElement] = {}
        for degree, coeff in self.coefficients.items():
            if degree < 0:
                raise ValueError(f"Degree must be non-negative, got {degree}")
            coeff = self.field.coerce(coeff)
            if not coeff.is_zero():
                cleaned[degree] = coeff
        self.coefficients = dict(sorted(cleaned.items()))

    @classmethod
    def from_sparse(cls, field: PrimeField,
                    pairs: Iterable[Tuple[int, Union[FieldElement, int]]]) -> 'UnivariatePolynomial':
        """Build from (degree, coefficient) pairs, summing repeated degrees."""
        acc: Dict[int, FieldElement] = {}
        for degree, coeff in pairs:
            acc[degree] = acc.get(degree, field.zero()) + field.coerce(coeff)
        return cls(field, acc)

    @classmethod
    def zero(cls, field: PrimeField) -> 'UnivariatePolynomial':
        return cls(field, {})

    @property
    def degree(self) -> int:
        if not self.coefficients:
            return 0
        return max(self.coefficients)

    def is_zero(self) -> bool:
        return not self.coefficients

    def coefficient(self, degree: int) -> FieldElement:
        return self.coefficients.get(degree, self.field.zero())

    def __add__(self, other: 'UnivariatePolynomial') -> 'UnivariatePolynomial':
        acc = dict(self.coefficients)
        for degree, coeff in other.coefficients.items():
            acc[degree] = acc.get(degree, self.field.zero()) + coeff
        return UnivariatePolynomial(self.field, acc)

    def evaluate(self, x: Union[FieldElement, int]) -> FieldElement:
        x = self.field.coerce(x)
        total = self.field.zero()
        for degree, coeff in self.coefficients.items():
            total = total + coeff * x ** degree
        return total

    def __str__(self) -> str:
        if not self.coefficients:
            return "0"
        parts = []
        for degree, coeff in sorted(self.coefficients.items(), reverse=True):
            if degree == 0:
                parts.append(str(coeff))
            elif degree == 1:
                parts.append(f"{coeff}*X")
            else:
                parts.append(f"{coeff}*X^{degree}")
        return " + ".join(parts)


_FACTOR = re.compile(r'^x([0-9]+)(?:\^([0-9]+))?$')
_INTEGER = re.compile(r'^[0-9]+$')


def parse_polynomial(expression: str, field: PrimeField,
                     num_vars: Optional[int] = None) -> MultivariatePolynomial:
    """
    Parse a polynomial expression into a MultivariatePolynomial.

    Format: "term1 + term2 - term3 + ..."
    Each term: "coef*x0^2*x3", "x1*x2" or a bare integer constant.
    Variables are written x0, x1, ... (0-indexed).

    Example:
        >>> g = parse_polynomial("2*x0^3 + x0*x2 + x1*x2", PrimeField(97))
        >>> g.num_vars
        3

    Args:
        expression: Polynomial expression string
        field: Coefficient field
        num_vars: Declared variable count (default: highest index + 1)

    Raises:
        MalformedClaimError: On unparseable input or out-of-range variables
    """
    text = expression.replace(" ", "")
    if not text:
        raise MalformedClaimError("Empty polynomial expression")

    # Split by + and -, keeping the sign
    parts = re.split(r'([+-])', text)
    if parts[0] == "":
        parts = parts[1:]
    else:
        parts = ['+'] + parts

    pairs: List[Tuple[int, Term]] = []
    for i in range(0, len(parts), 2):
        sign = parts[i]
        term_str = parts[i + 1] if i + 1 < len(parts) else ""
        if not term_str:
            raise MalformedClaimError(f"Dangling '{sign}' in '{expression}'")

        coefficient = 1 if sign == '+' else -1
        powers: List[Tuple[int, int]] = []
        for factor in term_str.split('*'):
            if _INTEGER.fullmatch(factor):
                coefficient *= int(factor)
                continue
            match = _FACTOR.fullmatch(factor)
            if match is None:
                raise MalformedClaimError(f"Cannot parse factor '{factor}' in '{expression}'")
            power = int(match.group(2)) if match.group(2) else 1
            powers.append((int(match.group(1)), power))
        pairs.append((coefficient, Term.from_pairs(powers)))

    if num_vars is None:
        num_vars = max((term.max_variable for _, term in pairs), default=-1) + 1
    return MultivariatePolynomial(field, num_vars, pairs)
