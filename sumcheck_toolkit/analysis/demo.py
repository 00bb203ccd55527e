"""
Soundness Analysis Demo

Runs the completeness fuzz and the soundness experiment and prints a
report.

Run with:
    python -m sumcheck_toolkit.analysis.demo
"""

import argparse
from typing import List, Optional

from ..config import ProtocolConfig, create_small_field_config, create_bls12_381_config
from ..protocol.hypercube import hypercube_sum
from .claims import EXAMPLE_SUM, create_example_claim, create_four_variable_claim
from .core import SoundnessExperiment


def demo_completeness(config: ProtocolConfig, num_claims: int):
    """Random honest claims must all be accepted."""
    print("\n" + "=" * 70)
    print("DEMO 1: COMPLETENESS FUZZ")
    print("=" * 70)
    print(f"\nField: {config.name}, {num_claims} random claims "
          f"(1-8 variables, degree 1-5, up to 15 terms)")

    metrics = SoundnessExperiment(config).run_completeness(num_claims)
    print(f"\n{metrics.summary()}")
    return metrics


def demo_soundness(config: ProtocolConfig, trials: int):
    """An adaptive liar in a tiny field, compared against the bound."""
    print("\n" + "=" * 70)
    print("DEMO 2: SOUNDNESS IN A TINY FIELD")
    print("=" * 70)

    experiment = SoundnessExperiment(config)
    claim = create_example_claim(config.field)
    print(f"\nClaim: g = {claim}")
    print(f"True sum: {EXAMPLE_SUM}, liar claims {EXAMPLE_SUM + 1}")

    metrics = experiment.run(claim, EXAMPLE_SUM + 1, trials)
    print(f"\n{metrics.summary()}")
    if metrics.exceeds_bound():
        print("\n✗ Acceptance rate is above the theoretical bound")
    else:
        print("\n✓ Acceptance rate is within the theoretical bound")
    return metrics


def demo_bound_policies(config: ProtocolConfig, trials: int):
    """Per-variable bounds vs. a single global bound."""
    print("\n" + "=" * 70)
    print("DEMO 3: DEGREE BOUND POLICIES")
    print("=" * 70)

    experiment = SoundnessExperiment(config)
    claim = create_four_variable_claim(config.field)
    print(f"\nClaim: g = {claim}")
    print(f"{'Policy':<16} {'Bound':>10} {'Accepted':>10}")
    print("-" * 40)
    true_sum = hypercube_sum(claim)
    for label, bounds in [("per-variable", None), ("global (3)", 3)]:
        metrics = experiment.run(claim, true_sum + 1, trials, bounds)
        print(f"{label:<16} {metrics.theoretical_bound:>9.2%} {metrics.acceptance_rate:>9.2%}")


def main(argv: Optional[List[str]] = None):
    """Run all demos."""
    parser = argparse.ArgumentParser(description="Sum-check soundness analysis")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--claims", type=int, default=50, help="random claims to fuzz")
    parser.add_argument("--trials", type=int, default=2000, help="liar runs per experiment")
    args = parser.parse_args(argv)

    print("\n" + "═" * 70)
    print("         SUM-CHECK SOUNDNESS ANALYSIS")
    print("═" * 70)

    completeness = demo_completeness(create_bls12_381_config(seed=args.seed), args.claims)
    small = create_small_field_config(seed=args.seed)
    demo_soundness(small, args.trials)
    demo_bound_policies(small, args.trials)

    print("\n" + "═" * 70)
    print("ANALYSIS COMPLETE")
    print("═" * 70)
    return 0 if completeness.all_accepted else 1


if __name__ == "__main__":
    raise SystemExit(main())
