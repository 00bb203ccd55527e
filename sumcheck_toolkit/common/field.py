"""
Finite Field Arithmetic for the Sum-Check Protocol.

Every value exchanged between prover and verifier lives in a prime field:
the claim's coefficients, the round polynomials, the random challenges and
the final oracle value. The protocol itself never looks inside an element;
it only adds, multiplies, raises to powers and compares.

Key Concepts:
    - All arithmetic is done modulo a prime p
    - Addition: (a + b) mod p
    - Multiplication: (a * b) mod p
    - Exponentiation: square-and-multiply, O(log exp) multiplications
    - Inversion: Extended Euclid (only needed by callers, never by the core)

Example:
    >>> field = PrimeField(97)
    >>> a = field.element(45)
    >>> b = field.element(67)
    >>> c = a + b  # (45 + 67) mod 97 = 15
    >>> print(c)
    15

Soundness Context:
    - A cheating prover survives one round with probability <= d / p,
      where d is the round polynomial's degree bound
    - The default field (BLS12-381 scalar field, p ~ 2^255) makes this
      negligible; the small test prime 97 makes it measurable
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .randomness import FieldRandomness


@dataclass
class FieldElement:
    """
    An element of a prime field Z_p.

    All operations automatically reduce the result modulo p. Plain Python
    integers are accepted on either side of an operator and are converted
    into the field first.

    Attributes:
        value: The integer value (always in range [0, p-1])
        field: Reference to the parent PrimeField
    """
    value: int
    field: 'PrimeField'

    def __post_init__(self):
        """Ensure value is reduced modulo p."""
        self.value = self.value % self.field.prime

    def __repr__(self) -> str:
        return f"FieldElement({self.value}, mod {self.field.prime})"

    def __str__(self) -> str:
        return str(self.value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            return self.value == other.value and self.field.prime == other.field.prime
        if isinstance(other, int):
            return self.value == (other % self.field.prime)
        return False

    def __hash__(self) -> int:
        return hash((self.value, self.field.prime))

    def _other_value(self, other: Union[FieldElement, int]) -> int:
        if isinstance(other, FieldElement):
            if other.field.prime != self.field.prime:
                raise ValueError(
                    f"Cannot combine elements of Z_{self.field.prime} and Z_{other.field.prime}"
                )
            return other.value
        return other

    # Arithmetic Operations

    def __add__(self, other: Union[FieldElement, int]) -> FieldElement:
        """Addition in the field: (a + b) mod p"""
        return FieldElement(self.value + self._other_value(other), self.field)

    def __radd__(self, other: int) -> FieldElement:
        return self.__add__(other)

    def __sub__(self, other: Union[FieldElement, int]) -> FieldElement:
        """Subtraction in the field: (a - b) mod p"""
        return FieldElement(self.value - self._other_value(other), self.field)

    def __rsub__(self, other: int) -> FieldElement:
        return FieldElement(other - self.value, self.field)

    def __mul__(self, other: Union[FieldElement, int]) -> FieldElement:
        """Multiplication in the field: (a * b) mod p"""
        return FieldElement(self.value * self._other_value(other), self.field)

    def __rmul__(self, other: int) -> FieldElement:
        return self.__mul__(other)

    def __truediv__(self, other: Union[FieldElement, int]) -> FieldElement:
        """Division in the field: a * b^(-1) mod p"""
        if isinstance(other, FieldElement):
            return self * other.inverse()
        return self * self.field.element(other).inverse()

    def __neg__(self) -> FieldElement:
        """Negation: -a = p - a"""
        return FieldElement(-self.value, self.field)

    def __pow__(self, exp: int) -> FieldElement:
        """
        Exponentiation using square-and-multiply.

        Round polynomials raise challenges to the exponents stored in the
        claim's terms, so this sits on the prover's hot path.
        """
        if exp < 0:
            # a^(-n) = (a^(-1))^n
            return self.inverse() ** (-exp)

        result = self.field.one()
        base = FieldElement(self.value, self.field)

        while exp > 0:
            if exp & 1:  # If least significant bit is 1
                result = result * base
            base = base * base
            exp >>= 1

        return result

    def inverse(self) -> FieldElement:
        """
        Compute modular inverse using Extended Euclidean Algorithm.

        Raises:
            ValueError: If self.value is 0 (no inverse exists)
        """
        if self.value == 0:
            raise ValueError("Cannot invert zero")

        old_r, r = self.value, self.field.prime
        old_s, s = 1, 0

        while r != 0:
            quotient = old_r // r
            old_r, r = r, old_r - quotient * r
            old_s, s = s, old_s - quotient * s

        if old_r != 1:
            raise ValueError(f"No inverse exists (gcd = {old_r})")

        return FieldElement(old_s % self.field.prime, self.field)

    def is_zero(self) -> bool:
        """Check if this element is zero."""
        return self.value == 0

    def is_one(self) -> bool:
        """Check if this element is one."""
        return self.value == 1


class PrimeField:
    """
    A prime field Z_p for modular arithmetic.

    Provides factory methods for field elements. The protocol engine is
    written against this interface only, so any prime works; the presets
    below cover testing, 64-bit friendly arithmetic and the pairing-curve
    scalar field used by real deployments.

    Attributes:
        prime: The prime modulus p

    Example:
        >>> field = PrimeField(97)
        >>> a = field.element(45)
        >>> field.element(-1) == 96
        True
    """

    # Common primes used in ZKP systems
    SMALL_TEST_PRIME = 97
    GOLDILOCKS_PRIME = (1 << 64) - (1 << 32) + 1  # 2^64 - 2^32 + 1
    BLS12_381_SCALAR_PRIME = 0x73eda753299d7d483339d80809a1d80553bda402fffe5bfeffffffff00000001

    def __init__(self, prime: int):
        """
        Initialize a prime field.

        Args:
            prime: The prime modulus. Should be prime for correct behavior.
                   (We don't verify primality for performance reasons)
        """
        if prime < 2:
            raise ValueError("Prime must be at least 2")
        self.prime = prime

    def __repr__(self) -> str:
        return f"PrimeField({self.prime})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PrimeField) and other.prime == self.prime

    def __hash__(self) -> int:
        return hash(self.prime)

    @property
    def size(self) -> int:
        """Number of elements in the field."""
        return self.prime

    def element(self, value: int) -> FieldElement:
        """Create a field element from an integer."""
        return FieldElement(value % self.prime, self)

    def coerce(self, value: Union[FieldElement, int]) -> FieldElement:
        """Accept either an integer or an element of this field."""
        if isinstance(value, FieldElement):
            if value.field.prime != self.prime:
                raise ValueError(f"{value!r} is not an element of Z_{self.prime}")
            return value
        return self.element(value)

    def zero(self) -> FieldElement:
        """Return the additive identity (0)."""
        return FieldElement(0, self)

    def one(self) -> FieldElement:
        """Return the multiplicative identity (1)."""
        return FieldElement(1, self)

    def random(self, rng: 'FieldRandomness', exclude_zero: bool = False) -> FieldElement:
        """
        Draw a uniformly random field element from an explicit source.

        Args:
            rng: Randomness source owned by the caller's protocol run
            exclude_zero: If True, never returns zero
        """
        if exclude_zero:
            return FieldElement(1 + rng.integer(self.prime - 1), self)
        return FieldElement(rng.integer(self.prime), self)


def random_field_elements(field: PrimeField, rng: 'FieldRandomness', count: int,
                          exclude_zero: bool = False) -> List[FieldElement]:
    """Generate multiple random field elements."""
    return [field.random(rng, exclude_zero) for _ in range(count)]


def field_for_preset(name: Optional[str]) -> PrimeField:
    """Resolve a preset name ("small", "goldilocks", "bls12-381") to a field."""
    presets = {
        "small": PrimeField.SMALL_TEST_PRIME,
        "goldilocks": PrimeField.GOLDILOCKS_PRIME,
        "bls12-381": PrimeField.BLS12_381_SCALAR_PRIME,
    }
    key = (name or "bls12-381").lower()
    if key not in presets:
        raise ValueError(f"Unknown field preset '{name}'. Choose from {sorted(presets)}")
    return PrimeField(presets[key])
