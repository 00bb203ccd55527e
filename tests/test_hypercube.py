import itertools

import pytest

from sumcheck_toolkit.analysis.claims import create_four_variable_claim
from sumcheck_toolkit.protocol.hypercube import decode, hypercube_points, hypercube_sum


def test_decode_is_msb_first(small_field):
    assert decode(0b110, 3, small_field) == [1, 1, 0]
    assert decode(0b001, 3, small_field) == [0, 0, 1]
    assert decode(0, 0, small_field) == []


def test_decode_is_a_deterministic_bijection(small_field):
    length = 4
    points = [tuple(decode(i, length, small_field)) for i in range(1 << length)]
    assert len(set(points)) == 1 << length
    assert points == [tuple(decode(i, length, small_field)) for i in range(1 << length)]
    assert points == [tuple(p) for p in itertools.product([0, 1], repeat=length)]


@pytest.mark.parametrize("index,length", [(8, 3), (-1, 3), (1, 0)])
def test_decode_rejects_out_of_range(small_field, index, length):
    with pytest.raises(ValueError):
        decode(index, length, small_field)


def test_hypercube_points_count(small_field):
    assert len(list(hypercube_points(5, small_field))) == 32
    assert list(hypercube_points(0, small_field)) == [[]]


def test_hypercube_sum_matches_worked_examples(example_claim, field):
    assert hypercube_sum(example_claim) == 12
    assert hypercube_sum(create_four_variable_claim(field)) == 28
