import random

import pytest

from sumcheck_toolkit.common.field import PrimeField, field_for_preset, random_field_elements
from sumcheck_toolkit.common.randomness import FieldRandomness
from sumcheck_toolkit.protocol.verifier import Verifier


def test_arithmetic_reduces_mod_p(small_field):
    a = small_field.element(45)
    b = small_field.element(67)
    assert (a + b).value == 15
    assert (a - b).value == 75
    assert (a * b).value == 8
    assert (-a).value == 52
    assert small_field.element(-1) == 96


def test_int_operands_on_either_side(small_field):
    a = small_field.element(10)
    assert 3 + a == 13
    assert 3 - a == 90
    assert 2 * a == 20


def test_pow_and_inverse(small_field):
    a = small_field.element(5)
    assert a ** 0 == 1
    assert a ** 3 == 125 % 97
    assert (a * a.inverse()).is_one()
    assert a ** -1 == a.inverse()
    assert (a / 5).is_one()
    with pytest.raises(ValueError):
        small_field.zero().inverse()


def test_mixing_fields_is_rejected(small_field, field):
    with pytest.raises(ValueError):
        small_field.one() + field.one()
    with pytest.raises(ValueError):
        small_field.coerce(field.one())


def test_presets():
    assert field_for_preset("small").prime == 97
    assert field_for_preset("goldilocks").prime == (1 << 64) - (1 << 32) + 1
    assert field_for_preset(None).prime == PrimeField.BLS12_381_SCALAR_PRIME
    with pytest.raises(ValueError):
        field_for_preset("mersenne")


def test_randomness_is_seedable_and_independent(small_field):
    a = FieldRandomness(small_field, seed=7)
    b = FieldRandomness(small_field, seed=7)
    assert [a.element() for _ in range(20)] == [b.element() for _ in range(20)]

    values = [a.integer(5) for _ in range(200)]
    assert all(0 <= v < 5 for v in values)
    assert set(values) == {0, 1, 2, 3, 4}

    with pytest.raises(ValueError):
        a.integer(0)


def test_unseeded_randomness_uses_system_source(field):
    rng = FieldRandomness(field)
    assert isinstance(rng._random, random.SystemRandom)
    assert isinstance(rng.spawn()._random, random.SystemRandom)

    seeded = FieldRandomness(field, seed=9)
    assert not isinstance(seeded._random, random.SystemRandom)
    assert seeded.spawn().seed is not None


def test_verifier_default_randomness_is_unseeded(example_claim):
    verifier = Verifier(example_claim)
    assert verifier.rng.seed is None
    assert isinstance(verifier.rng._random, random.SystemRandom)
    assert verifier.verify(12).accepted


def test_random_nonzero_elements(small_field):
    rng = FieldRandomness(small_field, seed=3)
    elements = random_field_elements(small_field, rng, 500, exclude_zero=True)
    assert not any(e.is_zero() for e in elements)
