import pytest

from sumcheck_toolkit.analysis.claims import random_claim
from sumcheck_toolkit.common.polynomial import MultivariatePolynomial, Term, UnivariatePolynomial, parse_polynomial
from sumcheck_toolkit.common.randomness import FieldRandomness
from sumcheck_toolkit.errors import MalformedClaimError, ProtocolStateError
from sumcheck_toolkit.protocol.hypercube import decode, hypercube_sum
from sumcheck_toolkit.protocol.prover import Prover


def test_round_zero_polynomial(example_claim, field):
    # sum over x1, x2 of 2X^3 + X*x2 + x1*x2 = 8X^3 + 2X + 1
    h0 = Prover(example_claim).produce_round_polynomial()
    assert h0 == UnivariatePolynomial(field, {3: 8, 1: 2, 0: 1})
    assert h0.evaluate(0) + h0.evaluate(1) == 12


def test_later_rounds_substitute_challenges(example_claim, field):
    prover = Prover(example_claim)
    prover.produce_round_polynomial()

    r1 = field.element(5)
    h1 = prover.produce_round_polynomial(r1)
    # sum over x2 of 2r^3 + r*x2 + X*x2 = 4r^3 + r + X
    assert h1 == UnivariatePolynomial(field, {0: 4 * 125 + 5, 1: 1})

    r2 = field.element(7)
    h2 = prover.produce_round_polynomial(r2)
    # no variables left to sum: 2*r1^3 + (r1 + r2) * X
    assert h2 == UnivariatePolynomial(field, {0: 250, 1: 12})
    assert prover.challenges == (r1, r2)
    assert prover.round == 2


def test_single_variable_claim_enumerates_empty_assignment(small_field):
    claim = parse_polynomial("3*x0^2 + 5", small_field)
    h0 = Prover(claim).produce_round_polynomial()
    assert h0 == UnivariatePolynomial(small_field, {2: 3, 0: 5})


def test_evaluate_term_splits_variables(example_claim, field):
    prover = Prover(example_claim)
    a, b = field.element(3), field.element(4)
    assert prover.evaluate_term(Term.from_pairs([(0, 3)]), [a, b]) == (field.one(), 3)
    assert prover.evaluate_term(Term.from_pairs([(1, 1), (2, 1)]), [a, b]) == (a * b, None)
    with pytest.raises(ValueError):
        prover.evaluate_term(Term.from_pairs([(0, 1)]), [a])


def test_evaluate_round_sums_to_round_polynomial(example_claim, field):
    prover = Prover(example_claim)
    total = UnivariatePolynomial.zero(field)
    for index in range(4):
        total = total + prover.evaluate_round(decode(index, 2, field))
    assert total == Prover(example_claim).produce_round_polynomial()


def test_round_zero_takes_no_challenge(example_claim, field):
    with pytest.raises(ProtocolStateError):
        Prover(example_claim).produce_round_polynomial(field.one())


def test_later_rounds_require_challenge(example_claim):
    prover = Prover(example_claim)
    prover.produce_round_polynomial()
    with pytest.raises(ProtocolStateError):
        prover.produce_round_polynomial()


def test_no_rounds_past_the_last_variable(example_claim, field):
    prover = Prover(example_claim)
    prover.produce_round_polynomial()
    prover.produce_round_polynomial(field.element(2))
    prover.produce_round_polynomial(field.element(3))
    with pytest.raises(ProtocolStateError):
        prover.produce_round_polynomial(field.element(4))
    assert len(prover.challenges) == 2


def test_claim_without_variables_is_malformed(field):
    with pytest.raises(MalformedClaimError):
        Prover(MultivariatePolynomial(field, 0, [(5, Term())]))


def test_round_degrees_respect_variable_bounds(field):
    rng = FieldRandomness(field, seed=99)
    for num_vars in range(1, 6):
        claim = random_claim(field, rng, num_vars, max_degree=4, max_terms=8)
        bounds = claim.variable_degrees()
        prover = Prover(claim)
        h = prover.produce_round_polynomial()
        assert h.evaluate(0) + h.evaluate(1) == hypercube_sum(claim)
        assert h.degree <= bounds[0]
        for j in range(1, num_vars):
            h = prover.produce_round_polynomial(rng.element())
            assert h.degree <= bounds[j]
