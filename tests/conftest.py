"""Shared pytest fixtures for the sum-check toolkit tests."""

import pytest

from sumcheck_toolkit.common.field import PrimeField
from sumcheck_toolkit.common.randomness import FieldRandomness
from sumcheck_toolkit.analysis.claims import create_example_claim


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running fuzz and statistics tests")


@pytest.fixture
def field():
    return PrimeField(PrimeField.BLS12_381_SCALAR_PRIME)


@pytest.fixture
def small_field():
    return PrimeField(PrimeField.SMALL_TEST_PRIME)


@pytest.fixture
def rng(field):
    return FieldRandomness(field, seed=1234)


@pytest.fixture
def example_claim(field):
    # g = 2*x0^3 + x0*x2 + x1*x2, hypercube sum 12
    return create_example_claim(field)
