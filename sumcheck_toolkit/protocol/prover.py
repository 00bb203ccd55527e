"""
Sum-Check Prover: round-reduction engine.

Round j (0-indexed) produces the univariate polynomial

    h_j(X_j) = sum over (x_{j+1}, ..., x_{v-1}) in {0,1}^{v-j-1} of
               g(r_0, ..., r_{j-1}, X_j, x_{j+1}, ..., x_{v-1})

where r_0 .. r_{j-1} are the verifier's challenges so far.

Per term, the substitution splits three ways:
    - variables before j:  replaced by their challenge
    - variable j:          left symbolic, contributes X_j^power
    - variables after j:   replaced by the current hypercube assignment

so every term collapses to c * X_j^d and the round polynomial is the sum
of those monomials over all terms and all assignments.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple

from ..common.field import FieldElement
from ..common.polynomial import MultivariatePolynomial, Term, UnivariatePolynomial
from ..errors import MalformedClaimError, ProtocolStateError
from .hypercube import decode


class Prover:
    """
    Stateful prover for one protocol run.

    The claim is read-only; the challenge list only ever grows. Create a
    fresh Prover for every run.

    Example:
        >>> prover = Prover(claim)
        >>> h0 = prover.produce_round_polynomial()          # round 0
        >>> h1 = prover.produce_round_polynomial(r1)        # round 1
    """

    def __init__(self, claim: MultivariatePolynomial):
        if claim.num_vars < 1:
            raise MalformedClaimError("Sum-check needs a claim with at least one variable")
        self.claim = claim
        self.field = claim.field
        self.num_vars = claim.num_vars
        self._challenges: List[FieldElement] = []
        self._rounds_produced = 0

    @property
    def challenges(self) -> Tuple[FieldElement, ...]:
        return tuple(self._challenges)

    @property
    def round(self) -> int:
        """Index of the variable that is currently free."""
        return len(self._challenges)

    def produce_round_polynomial(self, challenge: Optional[FieldElement] = None) -> UnivariatePolynomial:
        """
        Fix the previous variable to `challenge` and return the next round polynomial.

        Raises:
            ProtocolStateError: If called with a challenge in round 0,
                without one afterwards, or more than num_vars times
        """
        if self._rounds_produced == 0:
            if challenge is not None:
                raise ProtocolStateError("Round 0 takes no challenge")
        elif challenge is None:
            raise ProtocolStateError(f"Round {self._rounds_produced} requires a challenge")

        if self._rounds_produced >= self.num_vars:
            raise ProtocolStateError(
                f"All {self.num_vars} round polynomials have already been produced"
            )

        if challenge is not None:
            self._challenges.append(self.field.coerce(challenge))

        remaining = self.num_vars - self.round - 1

        acc: Dict[int, FieldElement] = {}
        for index in range(1 << remaining):
            point = decode(index, remaining, self.field)
            for degree, coeff in self._reduce_terms(point):
                acc[degree] = acc.get(degree, self.field.zero()) + coeff

        self._rounds_produced += 1
        return UnivariatePolynomial(self.field, acc)

    def evaluate_round(self, point: Sequence[FieldElement]) -> UnivariatePolynomial:
        """
        Contribution of a single trailing assignment to the current round.

        Args:
            point: Values for the variables after the free one
        """
        return UnivariatePolynomial.from_sparse(self.field, self._reduce_terms(point))

    def evaluate_term(self, term: Term,
                      point: Sequence[FieldElement]) -> Tuple[FieldElement, Optional[int]]:
        """
        Substitute everything but the free variable in one term.

        Returns:
            (numeric factor, power of the free variable or None if absent)
        """
        j = self.round
        if len(point) != self.num_vars - j - 1:
            raise ValueError(
                f"Round {j} expects {self.num_vars - j - 1} trailing values, got {len(point)}"
            )

        free_power: Optional[int] = None
        product = self.field.one()
        for var, power in term:
            if var == j:
                free_power = power
            elif var < j:
                product = product * self._challenges[var] ** power
            else:
                product = product * point[var - j - 1] ** power
        return product, free_power

    def _reduce_terms(self, point: Sequence[FieldElement]) -> List[Tuple[int, FieldElement]]:
        """(degree, coefficient) monomials of every claim term at `point`."""
        reduced = []
        for coeff, term in self.claim:
            factor, free_power = self.evaluate_term(term, point)
            reduced.append((free_power or 0, coeff * factor))
        return reduced
