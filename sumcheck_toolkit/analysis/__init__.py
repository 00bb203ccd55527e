"""
Soundness Analysis

Measures the protocol's two guarantees empirically:
    - Completeness: random honest claims are always accepted
    - Soundness: an adaptive liar defending a false sum is accepted no more
      often than (sum of degree bounds) / p

Key Components:
    - SoundnessExperiment: Repeated-trial driver
    - SoundnessMetrics / CompletenessMetrics: Results and summaries
    - AdaptiveLiar: Round-consistent dishonest prover
    - Predefined and random claims

Usage:
    >>> from sumcheck_toolkit.config import create_small_field_config
    >>> from sumcheck_toolkit.analysis import SoundnessExperiment, create_example_claim
    >>>
    >>> config = create_small_field_config(seed=3)
    >>> experiment = SoundnessExperiment(config)
    >>> metrics = experiment.run(create_example_claim(config.field), 13, trials=500)
    >>> metrics.exceeds_bound()
    False
"""

from .claims import (
    EXAMPLE_SUM,
    create_example_claim,
    create_four_variable_claim,
    random_claim,
    random_fuzz_claim,
)
from .provers import AdaptiveLiar, spread_polynomial
from .core import (
    SoundnessExperiment,
    SoundnessMetrics,
    CompletenessMetrics,
    soundness_bound,
)

__all__ = [
    "EXAMPLE_SUM",
    "create_example_claim",
    "create_four_variable_claim",
    "random_claim",
    "random_fuzz_claim",
    "AdaptiveLiar",
    "spread_polynomial",
    "SoundnessExperiment",
    "SoundnessMetrics",
    "CompletenessMetrics",
    "soundness_bound",
]
