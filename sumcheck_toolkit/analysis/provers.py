"""
Dishonest provers for soundness experiments.

A prover claiming a wrong sum must lie in round 0. The adaptive liar here
keeps every later round consistent with its previous lie by adding

    D_j(X) = (e_j - s_j) * P_d(X)

to the honest round polynomial, where e_j is what the verifier expects,
s_j is the honest h_j(0) + h_j(1) and d is the round's degree bound.
P_d has degree d, roots 2, 3, ..., d+1 and is scaled so that
P_d(0) + P_d(1) = 1 (a constant 1/2 when d is 0). Each consistency check
therefore passes, and the lie disappears exactly when a challenge lands
on one of the d roots. The more degree the verifier tolerates, the more
roots the liar gets: the per-round d / p term of the soundness bound.
"""

from __future__ import annotations
from typing import Dict, List, Optional

from ..common.field import FieldElement, PrimeField
from ..common.polynomial import MultivariatePolynomial, UnivariatePolynomial
from ..protocol.prover import Prover
from ..protocol.verifier import DegreeBounds, resolve_degree_bounds


def spread_polynomial(field: PrimeField, degree: int) -> UnivariatePolynomial:
    """
    Degree-`degree` polynomial P with P(0) + P(1) = 1 and as many roots as it can.

    Falls back to X^degree when the field is too small for the roots
    2 .. degree+1 to keep P(0) + P(1) nonzero.
    """
    if degree == 0:
        return UnivariatePolynomial(field, {0: field.one() / 2})

    # coefficients of prod (X - a) for a = 2 .. degree+1, lowest degree first
    coeffs: List[FieldElement] = [field.one()]
    for a in range(2, degree + 2):
        shifted = [field.zero()] + coeffs
        for i, c in enumerate(coeffs):
            shifted[i] = shifted[i] - c * a
        coeffs = shifted

    product = UnivariatePolynomial(field, dict(enumerate(coeffs)))
    edge_sum = product.evaluate(0) + product.evaluate(1)
    if edge_sum.is_zero() or product.degree != degree:
        return UnivariatePolynomial(field, {degree: 1})

    scale = edge_sum.inverse()
    return UnivariatePolynomial(field, {d: c * scale for d, c in product.coefficients.items()})


class AdaptiveLiar:
    """
    Prover that backs a false claimed sum while staying round-consistent.

    Example:
        >>> liar = AdaptiveLiar(claim, claimed_sum=13)
        >>> verify(claim, 13, prover=liar).reason
        <RejectionReason.ORACLE_MISMATCH: 'oracle_mismatch'>
    """

    def __init__(self, claim: MultivariatePolynomial, claimed_sum,
                 degree_bounds: DegreeBounds = None):
        """
        Args:
            claim: The claim polynomial
            claimed_sum: The false sum to back
            degree_bounds: The bounds the verifier enforces; each patch uses
                the full degree they allow
        """
        self.honest = Prover(claim)
        self.field = claim.field
        self.claimed_sum = self.field.coerce(claimed_sum)
        self.bounds: List[int] = resolve_degree_bounds(claim, degree_bounds)[0]
        self._spreads: Dict[int, UnivariatePolynomial] = {}
        self._last: Optional[UnivariatePolynomial] = None

    def _spread(self, degree: int) -> UnivariatePolynomial:
        if degree not in self._spreads:
            self._spreads[degree] = spread_polynomial(self.field, degree)
        return self._spreads[degree]

    def produce_round_polynomial(self, challenge: Optional[FieldElement] = None) -> UnivariatePolynomial:
        h = self.honest.produce_round_polynomial(challenge)
        j = self.honest.round

        expected = self.claimed_sum if self._last is None else self._last.evaluate(challenge)
        gap = expected - (h.evaluate(0) + h.evaluate(1))
        if gap.is_zero():
            self._last = h
            return h

        spread = self._spread(self.bounds[j])
        patch = UnivariatePolynomial(self.field, {d: c * gap for d, c in spread.coefficients.items()})
        self._last = h + patch
        return self._last
