"""
Exceptions and rejection reasons for the Sum-Check toolkit.

Two kinds of failure are kept apart:
    - Protocol-level dishonesty (bad degree, inconsistent round, failed
      oracle check) is an expected outcome. The verifier returns it as a
      RejectionReason on its result and never raises.
    - Misuse of the API (prover driven out of order, malformed claim data)
      raises immediately.
"""

from enum import Enum


class RejectionReason(Enum):
    """Why a verifier run ended in REJECT."""
    MALFORMED_CLAIM = "malformed_claim"
    DEGREE_BOUND_EXCEEDED = "degree_bound_exceeded"
    CONSISTENCY_MISMATCH = "consistency_mismatch"
    ORACLE_MISMATCH = "oracle_mismatch"

    def __str__(self) -> str:
        return self.value


class SumCheckError(Exception):
    """Base class for all toolkit errors."""


class MalformedClaimError(SumCheckError, ValueError):
    """Claim data violates the polynomial invariants."""


class ProtocolStateError(SumCheckError, RuntimeError):
    """The prover or verifier was driven out of protocol order."""
