"""
Soundness and Completeness Experiments.

The protocol makes two promises:
    - Completeness: an honest prover with the true sum is always accepted
    - Soundness: a false sum is accepted with probability at most
          (sum of per-round degree bounds) / p

Completeness is checked by fuzzing random claims against their
brute-force sums. Soundness is checked by repeating the protocol against
an adaptive liar and counting acceptances. In the default 255-bit field the
acceptance rate is zero for any practical number of trials; in the small
test field (p = 97) the liar wins often enough to compare the empirical
rate against the theoretical bound.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Sequence
import math

import numpy as np

from ..common.polynomial import MultivariatePolynomial
from ..config import ProtocolConfig
from ..errors import RejectionReason
from ..protocol.hypercube import hypercube_sum
from ..protocol.verifier import DegreeBounds, resolve_degree_bounds, verify
from .claims import random_fuzz_claim
from .provers import AdaptiveLiar


REASONS: List[RejectionReason] = list(RejectionReason)


def soundness_bound(claim: MultivariatePolynomial, degree_bounds: DegreeBounds = None) -> float:
    """Upper bound on the probability a false claim is accepted."""
    bounds, _ = resolve_degree_bounds(claim, degree_bounds)
    return min(1.0, sum(bounds) / claim.field.size)


@dataclass
class SoundnessMetrics:
    """
    Outcome of repeated runs with a false claimed sum.

    Attributes:
        trials: Number of protocol runs
        accepted: Runs that (wrongly) accepted
        true_sum: Brute-force hypercube sum
        claimed_sum: The false sum the liar defended
        theoretical_bound: (sum of degree bounds) / p
        rejection_counts: Rejections per RejectionReason value
    """
    trials: int
    accepted: int
    true_sum: int
    claimed_sum: int
    theoretical_bound: float
    rejection_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def acceptance_rate(self) -> float:
        return self.accepted / self.trials if self.trials else 0.0

    @property
    def rejection_rate(self) -> float:
        return 1.0 - self.acceptance_rate

    def exceeds_bound(self, sigmas: float = 3.0) -> bool:
        """
        True if the acceptance rate is implausibly far above the bound.

        Uses the binomial standard deviation at the bound as tolerance.
        """
        p = self.theoretical_bound
        stddev = math.sqrt(p * (1 - p) / self.trials) if self.trials else 0.0
        return self.acceptance_rate > p + sigmas * stddev

    def summary(self) -> str:
        """Return summary string."""
        lines = [
            f"SoundnessMetrics:",
            f"  True sum: {self.true_sum}",
            f"  Claimed sum: {self.claimed_sum}",
            f"  Trials: {self.trials:,}",
            f"  Wrongly accepted: {self.accepted:,} ({self.acceptance_rate:.2%})",
            f"  Theoretical bound: {self.theoretical_bound:.2%}",
            f"  Rejections by reason:",
        ]
        for reason, count in self.rejection_counts.items():
            lines.append(f"    {reason:<24} {count:>8,}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (f"SoundnessMetrics(trials={self.trials}, "
                f"acceptance={self.acceptance_rate:.4f}, bound={self.theoretical_bound:.4f})")


@dataclass
class CompletenessMetrics:
    """Outcome of fuzzing random honest claims."""
    claims_checked: int
    accepted: int
    vars_histogram: Dict[int, int] = field(default_factory=dict)
    failures: List[str] = field(default_factory=list)

    @property
    def all_accepted(self) -> bool:
        return self.accepted == self.claims_checked

    def summary(self) -> str:
        """Return summary string."""
        lines = [
            f"CompletenessMetrics:",
            f"  Claims checked: {self.claims_checked:,}",
            f"  Accepted: {self.accepted:,}",
            f"  Claims per variable count: {dict(sorted(self.vars_histogram.items()))}",
        ]
        for failure in self.failures:
            lines.append(f"  FAILED: {failure}")
        return "\n".join(lines)


class SoundnessExperiment:
    """
    Repeats the protocol to measure acceptance behaviour.

    Each trial gets its own randomness spawned from the configuration's
    seed, so an experiment is reproducible but its trials are independent.

    Usage:
        >>> config = create_small_field_config(seed=3)
        >>> experiment = SoundnessExperiment(config)
        >>> claim = create_example_claim(config.field)
        >>> metrics = experiment.run(claim, claimed_sum=13, trials=1000)
        >>> print(metrics.summary())
    """

    def __init__(self, config: ProtocolConfig):
        self.config = config
        self.field = config.field

    def run(self, claim: MultivariatePolynomial, claimed_sum, trials: int,
            degree_bounds: DegreeBounds = None) -> SoundnessMetrics:
        """
        Run `trials` protocols in which an adaptive liar defends `claimed_sum`.

        Args:
            claim: The claim polynomial
            claimed_sum: A sum different from the true hypercube sum
            trials: Number of independent runs
            degree_bounds: Override the configuration's degree bound
        """
        if trials < 1:
            raise ValueError("trials must be positive")
        if degree_bounds is None:
            degree_bounds = self.config.degree_bound

        true_sum = hypercube_sum(claim)
        claimed = self.field.coerce(claimed_sum)
        if claimed == true_sum:
            raise ValueError("claimed_sum equals the true sum; nothing to measure")

        master = self.config.create_rng()
        outcomes = np.zeros(trials, dtype=bool)
        reason_codes = np.full(trials, -1, dtype=np.int64)

        for t in range(trials):
            result = verify(claim, claimed, degree_bounds, master.spawn(),
                            prover=AdaptiveLiar(claim, claimed, degree_bounds))
            outcomes[t] = result.accepted
            if result.reason is not None:
                reason_codes[t] = REASONS.index(result.reason)

        counts = np.bincount(reason_codes[reason_codes >= 0], minlength=len(REASONS))
        return SoundnessMetrics(
            trials=trials,
            accepted=int(np.count_nonzero(outcomes)),
            true_sum=true_sum.value,
            claimed_sum=claimed.value,
            theoretical_bound=soundness_bound(claim, degree_bounds),
            rejection_counts={reason.value: int(c) for reason, c in zip(REASONS, counts)},
        )

    def sweep_offsets(self, claim: MultivariatePolynomial, offsets: Sequence[int],
                      trials: int) -> Dict[int, SoundnessMetrics]:
        """
        Run the experiment for claimed sums true_sum + offset.

        Returns:
            Dict mapping offset to metrics
        """
        true_sum = hypercube_sum(claim)
        results = {}
        for offset in offsets:
            results[offset] = self.run(claim, true_sum + offset, trials)
        return results

    def run_completeness(self, num_claims: int, max_vars: int = 8, max_degree: int = 5,
                         max_terms: int = 15) -> CompletenessMetrics:
        """
        Fuzz random claims against their true sums; every run should accept.
        """
        master = self.config.create_rng()
        metrics = CompletenessMetrics(claims_checked=num_claims, accepted=0)

        for _ in range(num_claims):
            claim = random_fuzz_claim(self.field, master, max_vars, max_degree, max_terms)
            metrics.vars_histogram[claim.num_vars] = metrics.vars_histogram.get(claim.num_vars, 0) + 1
            result = verify(claim, hypercube_sum(claim), self.config.degree_bound, master.spawn())
            if result.accepted:
                metrics.accepted += 1
            else:
                metrics.failures.append(f"{claim} -> {result.reason}: {result.message}")

        return metrics
