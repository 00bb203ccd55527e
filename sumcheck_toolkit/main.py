"""
Sum-Check Toolkit - Main Entry Point

Runs the protocol on a literal claim and reports ACCEPT or REJECT.

Run with:
    python -m sumcheck_toolkit.main --poly "2*x0^3 + x0*x2 + x1*x2" --claimed-sum 12 --verbose

Without --poly the built-in example claim is used. Without --claimed-sum
the brute-force hypercube sum is claimed (an honest run).

Exit codes:
    0  accepted
    1  rejected by the protocol
    2  malformed claim or arguments
"""

import argparse
from typing import List, Optional

from .common.field import field_for_preset
from .common.polynomial import parse_polynomial
from .config import ProtocolConfig
from .errors import MalformedClaimError, RejectionReason
from .protocol.hypercube import hypercube_sum
from .protocol.verifier import VerificationResult, verify


EXAMPLE_POLYNOMIAL = "2*x0^3 + x0*x2 + x1*x2"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sumcheck-verify",
        description="Run the sum-check protocol on a polynomial claim.",
    )
    parser.add_argument("--poly", default=EXAMPLE_POLYNOMIAL,
                        help=f"claim polynomial, e.g. \"{EXAMPLE_POLYNOMIAL}\"")
    parser.add_argument("--num-vars", type=int, default=None,
                        help="declared variable count (default: highest index + 1)")
    parser.add_argument("--claimed-sum", type=int, default=None,
                        help="claimed hypercube sum (default: the true sum)")
    parser.add_argument("--field", default="bls12-381",
                        choices=["bls12-381", "goldilocks", "small"])
    parser.add_argument("--degree-bound", type=int, default=None,
                        help="single global degree bound (default: per-variable table)")
    parser.add_argument("--seed", type=int, default=None, help="challenge randomness seed")
    parser.add_argument("--verbose", action="store_true", help="print round-by-round trace")
    return parser


def report(result: VerificationResult):
    """Print the verdict line and the result summary."""
    print()
    print(result.summary())
    print()
    print("ACCEPT" if result.accepted else "REJECT")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    field = field_for_preset(args.field)
    try:
        config = ProtocolConfig(name=args.field, prime=field.prime, seed=args.seed,
                                degree_bound=args.degree_bound, verbose=args.verbose)
    except ValueError as e:
        parser.error(str(e))

    try:
        claim = parse_polynomial(args.poly, field, args.num_vars)
    except MalformedClaimError as e:
        print(f"REJECT ({RejectionReason.MALFORMED_CLAIM}): {e}")
        return 2

    claimed_sum = args.claimed_sum
    if claimed_sum is None:
        claimed_sum = hypercube_sum(claim)
        print(f"No --claimed-sum given; claiming the true sum {claimed_sum}")

    result = verify(claim, claimed_sum, config.degree_bound, config.create_rng(), verbose=config.verbose)
    report(result)
    if result.reason is RejectionReason.MALFORMED_CLAIM:
        return 2
    return 0 if result.accepted else 1


if __name__ == "__main__":
    raise SystemExit(main())
