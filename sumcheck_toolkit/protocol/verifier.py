"""
Sum-Check Verifier: round driver and final oracle check.

The Sum-Check Protocol:
    GOAL: Check that sum of g(x) over x in {0,1}^v equals C

    Without Sum-Check: Verifier evaluates g 2^v times (exponential!)
    With Sum-Check: v rounds, each costing O(degree) field operations

    Round 0:
        Prover sends h_0(X_0); verifier checks h_0(0) + h_0(1) == C
    Round j = 1 .. v-1:
        Verifier samples r_j, sets expected = h_{j-1}(r_j)
        Prover sends h_j(X_j); verifier checks h_j(0) + h_j(1) == expected
    Final:
        Verifier samples r_v, checks h_{v-1}(r_v) == g(r_1, ..., r_v)

    Every round polynomial must also respect its variable's degree bound.
    A cheating prover that passes a round has to get lucky on the random
    challenge: probability <= degree / p per round.

State machine:
    INIT -> ROUND(0) -> ... -> ROUND(v-1) -> FINAL -> ACCEPT
    Any failed check jumps straight to REJECT. Nothing moves backwards.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from ..common.field import FieldElement
from ..common.polynomial import MultivariatePolynomial, Term, UnivariatePolynomial
from ..common.randomness import FieldRandomness
from ..config import ProtocolConfig, PER_VARIABLE_POLICY, GLOBAL_POLICY
from ..errors import MalformedClaimError, ProtocolStateError, RejectionReason
from .prover import Prover


EXPLICIT_POLICY = "explicit"

DegreeBounds = Union[None, int, Sequence[int]]


class VerifierState(Enum):
    INIT = "init"
    ROUND = "round"
    FINAL = "final"
    ACCEPT = "accept"
    REJECT = "reject"


_ORDER = {
    VerifierState.INIT: 0,
    VerifierState.ROUND: 1,
    VerifierState.FINAL: 2,
    VerifierState.ACCEPT: 3,
    VerifierState.REJECT: 3,
}


@dataclass
class RoundRecord:
    """
    One round as seen by the verifier.

    Attributes:
        round_num: Round index j (0-indexed, equals the free variable)
        challenge: Challenge handed to the prover before this round (None in round 0)
        polynomial: The prover's round polynomial h_j
        expected: Value h_j(0) + h_j(1) had to match
        degree_bound: Bound enforced on h_j
    """
    round_num: int
    challenge: Optional[FieldElement]
    polynomial: UnivariatePolynomial
    expected: FieldElement
    degree_bound: int

    @property
    def round_sum(self) -> FieldElement:
        """h_j(0) + h_j(1)"""
        return self.polynomial.evaluate(0) + self.polynomial.evaluate(1)


@dataclass
class VerificationResult:
    """
    Complete result of one verifier run.

    Attributes:
        accepted: Whether every check passed
        claimed_sum: The sum the prover claimed
        challenges: Challenges drawn, in order (length v on acceptance)
        rounds: Per-round records up to the point the run stopped
        bound_policy: Degree-bound policy in force
        reason: Why the run rejected (None on acceptance)
        failed_round: Round index of the failed check (v for the final check)
        message: Human-readable diagnostic
        final_value: h_{v-1}(r_v), if the run got that far
        oracle_value: g(r_1, ..., r_v), if the run got that far
    """
    accepted: bool
    claimed_sum: FieldElement
    challenges: List[FieldElement] = field(default_factory=list)
    rounds: List[RoundRecord] = field(default_factory=list)
    bound_policy: str = PER_VARIABLE_POLICY
    reason: Optional[RejectionReason] = None
    failed_round: Optional[int] = None
    message: str = ""
    final_value: Optional[FieldElement] = None
    oracle_value: Optional[FieldElement] = None

    @property
    def rejected(self) -> bool:
        return not self.accepted

    @property
    def num_rounds(self) -> int:
        return len(self.rounds)

    def summary(self) -> str:
        """Return summary string."""
        verdict = "ACCEPT" if self.accepted else f"REJECT ({self.reason})"
        lines = [
            f"VerificationResult: {verdict}",
            f"  Claimed sum: {self.claimed_sum}",
            f"  Rounds completed: {self.num_rounds}",
            f"  Degree bound policy: {self.bound_policy}",
        ]
        if self.failed_round is not None:
            lines.append(f"  Failed at round: {self.failed_round}")
        if self.message:
            lines.append(f"  Detail: {self.message}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        verdict = "accept" if self.accepted else f"reject:{self.reason}"
        return f"VerificationResult({verdict}, rounds={self.num_rounds})"


def max_degrees(claim: MultivariatePolynomial) -> List[int]:
    """Degree lookup table: largest exponent of each variable in the claim."""
    return claim.variable_degrees()


def _check_bound(bound) -> None:
    if isinstance(bound, bool) or not isinstance(bound, int):
        raise ValueError(f"degree bound must be an integer, got {bound!r}")
    if bound < 0:
        raise ValueError(f"degree bound must be non-negative, got {bound}")


def resolve_degree_bounds(claim: MultivariatePolynomial,
                          degree_bounds: DegreeBounds = None) -> Tuple[List[int], str]:
    """
    Turn a degree-bound argument into one bound per round.

    Args:
        claim: The claim polynomial
        degree_bounds: None (per-variable table from the claim), an int
            (one global bound) or an explicit sequence of length num_vars

    Returns:
        (bounds, policy name)
    """
    if degree_bounds is None:
        return max_degrees(claim), PER_VARIABLE_POLICY
    if isinstance(degree_bounds, int):
        _check_bound(degree_bounds)
        return [degree_bounds] * claim.num_vars, GLOBAL_POLICY
    bounds = list(degree_bounds)
    if len(bounds) != claim.num_vars:
        raise ValueError(f"Expected {claim.num_vars} degree bounds, got {len(bounds)}")
    for bound in bounds:
        _check_bound(bound)
    return bounds, EXPLICIT_POLICY


class Verifier:
    """
    Drives one sum-check run against a prover.

    The verifier never evaluates the claim on the hypercube. It only
    evaluates round polynomials at 0, 1 and the challenges, plus one full
    evaluation of the claim at the final random point (the oracle query).

    Example:
        >>> field = PrimeField(97)
        >>> g = parse_polynomial("2*x0^3 + x0*x2 + x1*x2", field)
        >>> verifier = Verifier(g, FieldRandomness(field, seed=42))
        >>> verifier.verify(12).accepted
        True
    """

    def __init__(self, claim: MultivariatePolynomial,
                 rng: Optional[FieldRandomness] = None,
                 degree_bounds: DegreeBounds = None,
                 verbose: bool = False):
        """
        Args:
            claim: The polynomial whose hypercube sum is being claimed
            rng: Challenge randomness (fresh unseeded source if None)
            degree_bounds: See resolve_degree_bounds
            verbose: Print a round-by-round trace
        """
        self.claim = claim
        self.field = claim.field
        self.rng = rng if rng is not None else FieldRandomness(claim.field)
        if self.rng.field != self.field:
            raise ValueError(f"Randomness is over Z_{self.rng.field.prime}, claim over Z_{self.field.prime}")
        self.degree_bounds = degree_bounds
        self.verbose = verbose
        self.state = VerifierState.INIT
        self.round: Optional[int] = None

    @property
    def state_label(self) -> str:
        """State name with the round index while rounds are running, e.g. ROUND(2)."""
        if self.state is VerifierState.ROUND:
            return f"ROUND({self.round})"
        return self.state.name

    def _advance(self, state: VerifierState, round_num: Optional[int] = None):
        if _ORDER[state] < _ORDER[self.state] or self.state in (VerifierState.ACCEPT, VerifierState.REJECT):
            raise ProtocolStateError(f"Illegal verifier transition {self.state_label} -> {state.name}")
        if state is VerifierState.ROUND:
            expected = 0 if self.state is VerifierState.INIT else self.round + 1
            if round_num != expected:
                raise ProtocolStateError(f"Illegal verifier transition {self.state_label} -> ROUND({round_num})")
            self.round = round_num
        self.state = state

    def _reject(self, result: VerificationResult, reason: RejectionReason,
                round_num: Optional[int], message: str) -> VerificationResult:
        self._advance(VerifierState.REJECT)
        result.accepted = False
        result.reason = reason
        result.failed_round = round_num
        result.message = message
        if self.verbose:
            print(f"\n✗ REJECT at round {round_num}: {reason}")
            print(f"  {message}")
        return result

    def _check_round(self, result: VerificationResult, record: RoundRecord) -> bool:
        """Degree and consistency checks for one round. Rejects the run on failure."""
        result.rounds.append(record)
        if self.verbose:
            self._print_round(record)

        h = record.polynomial
        if h.degree > record.degree_bound:
            self._reject(result, RejectionReason.DEGREE_BOUND_EXCEEDED, record.round_num,
                         f"deg(h_{record.round_num}) = {h.degree} exceeds bound {record.degree_bound}")
            return False

        actual = record.round_sum
        if actual != record.expected:
            self._reject(result, RejectionReason.CONSISTENCY_MISMATCH, record.round_num,
                         f"h_{record.round_num}(0) + h_{record.round_num}(1) = {actual}, "
                         f"expected {record.expected}")
            return False
        return True

    def verify(self, claimed_sum: Union[FieldElement, int],
               prover: Optional[Prover] = None) -> VerificationResult:
        """
        Run the full protocol.

        Args:
            claimed_sum: The value the prover claims the hypercube sum equals
            prover: Anything with produce_round_polynomial(challenge);
                an honest Prover over the claim if None

        Returns:
            VerificationResult (rejections are returned, not raised)
        """
        self.state = VerifierState.INIT
        self.round = None
        claimed_sum = self.field.coerce(claimed_sum)
        result = VerificationResult(accepted=False, claimed_sum=claimed_sum)

        if self.claim.num_vars < 1:
            return self._reject(result, RejectionReason.MALFORMED_CLAIM, None,
                                "Sum-check needs a claim with at least one variable")

        bounds, result.bound_policy = resolve_degree_bounds(self.claim, self.degree_bounds)
        if prover is None:
            prover = Prover(self.claim)

        v = self.claim.num_vars
        if self.verbose:
            self._print_header(claimed_sum, bounds, result.bound_policy)

        # Round 0
        self._advance(VerifierState.ROUND, 0)
        h = prover.produce_round_polynomial(None)
        if not self._check_round(result, RoundRecord(0, None, h, claimed_sum, bounds[0])):
            return result

        # Rounds 1 .. v-1
        for j in range(1, v):
            self._advance(VerifierState.ROUND, j)
            r = self.rng.element()
            result.challenges.append(r)
            expected = h.evaluate(r)
            h = prover.produce_round_polynomial(r)
            if not self._check_round(result, RoundRecord(j, r, h, expected, bounds[j])):
                return result

        # Final oracle check
        self._advance(VerifierState.FINAL)
        r = self.rng.element()
        result.challenges.append(r)
        result.final_value = h.evaluate(r)
        result.oracle_value = self.claim.evaluate(result.challenges)

        if self.verbose:
            self._print_final(result)

        if result.final_value != result.oracle_value:
            return self._reject(result, RejectionReason.ORACLE_MISMATCH, v,
                                f"h_{v - 1}(r_{v}) = {result.final_value}, "
                                f"g(r) = {result.oracle_value}")

        self._advance(VerifierState.ACCEPT)
        result.accepted = True
        if self.verbose:
            print(f"\n✓ VERIFICATION PASSED")
        return result

    # =========================================================================
    # Trace printing
    # =========================================================================

    def _print_header(self, claimed_sum: FieldElement, bounds: List[int], policy: str):
        print("\n" + "═" * 70)
        print("              SUM-CHECK PROTOCOL")
        print("═" * 70)
        print(f"\nClaim: g = {self.claim}")
        print(f"Number of variables: v = {self.claim.num_vars}")
        print(f"Claimed sum: {claimed_sum}")
        print(f"Degree bounds ({policy}): {bounds}")
        if policy == GLOBAL_POLICY:
            print("  (global bound: weaker than the per-variable table when degrees differ)")

    def _print_round(self, record: RoundRecord):
        j = record.round_num
        print(f"\n{'─' * 70}")
        print(f"ROUND {j}")
        print(f"{'─' * 70}")
        if record.challenge is not None:
            print(f"Challenge r_{j} = {record.challenge}")
        print(f"h_{j}(X_{j}) = {record.polynomial}")
        print(f"deg(h_{j}) = {record.polynomial.degree}  (bound {record.degree_bound})")
        print(f"h_{j}(0) + h_{j}(1) = {record.round_sum}")
        print(f"Expected: {record.expected}")

    def _print_final(self, result: VerificationResult):
        v = self.claim.num_vars
        print(f"\n{'═' * 70}")
        print("FINAL ORACLE CHECK")
        print(f"{'═' * 70}")
        print(f"Final challenge r_{v} = {result.challenges[-1]}")
        print(f"h_{v - 1}(r_{v}) = {result.final_value}")
        print(f"g(r_1, ..., r_{v}) = {result.oracle_value}")


def verify(claim: MultivariatePolynomial, claimed_sum: Union[FieldElement, int],
           degree_bounds: DegreeBounds = None,
           rng: Optional[FieldRandomness] = None,
           prover: Optional[Prover] = None,
           verbose: bool = False) -> VerificationResult:
    """Run one sum-check on `claim` against `claimed_sum`."""
    return Verifier(claim, rng, degree_bounds, verbose).verify(claimed_sum, prover)


def run_protocol(num_vars: int, coefficients: Sequence[int], terms: Sequence[Term],
                 claimed_sum: int, config: Optional[ProtocolConfig] = None) -> VerificationResult:
    """
    Build a claim from raw parts and verify it.

    A malformed claim (length mismatch, out-of-range variable, no
    variables) comes back as a MALFORMED_CLAIM rejection instead of an
    exception.
    """
    config = config or ProtocolConfig()
    field_ = config.field
    try:
        claim = MultivariatePolynomial.from_coefficients(field_, num_vars, coefficients, terms)
    except MalformedClaimError as e:
        return VerificationResult(
            accepted=False,
            claimed_sum=field_.coerce(claimed_sum),
            bound_policy=config.bound_policy,
            reason=RejectionReason.MALFORMED_CLAIM,
            message=str(e),
        )
    return verify(claim, claimed_sum, config.degree_bound, config.create_rng(), verbose=config.verbose)
