import pytest

from sumcheck_toolkit.common.polynomial import (
    MultivariatePolynomial,
    Term,
    UnivariatePolynomial,
    parse_polynomial,
)
from sumcheck_toolkit.errors import MalformedClaimError


def test_term_normalizes_pairs():
    term = Term.from_pairs([(2, 1), (0, 2), (2, 3), (1, 0)])
    assert list(term) == [(0, 2), (2, 4)]
    assert term.degree == 6
    assert term.max_variable == 2
    assert term.power_of(2) == 4
    assert term.power_of(1) == 0
    assert str(term) == "x0^2*x2^4"
    assert Term.from_pairs([]).is_constant


def test_term_rejects_negative_values():
    with pytest.raises(MalformedClaimError):
        Term.from_pairs([(-1, 1)])
    with pytest.raises(MalformedClaimError):
        Term.from_pairs([(0, -2)])


def test_claim_rejects_out_of_range_variable(field):
    with pytest.raises(MalformedClaimError):
        MultivariatePolynomial(field, 2, [(1, Term.from_pairs([(2, 1)]))])


def test_claim_rejects_length_mismatch(field):
    with pytest.raises(MalformedClaimError):
        MultivariatePolynomial.from_coefficients(field, 2, [1, 2], [Term.from_pairs([(0, 1)])])


def test_claim_combines_and_drops_terms(small_field):
    x0 = Term.from_pairs([(0, 1)])
    x1 = Term.from_pairs([(1, 1)])
    poly = MultivariatePolynomial(small_field, 2, [(3, x0), (4, x0), (5, x1), (-5, x1)])
    assert poly.num_terms == 1
    assert list(poly) == [(small_field.element(7), x0)]


def test_claim_evaluate(example_claim, field):
    assert example_claim.evaluate([1, 1, 1]) == 4
    assert example_claim.evaluate([2, 3, 5]) == 2 * 8 + 10 + 15
    with pytest.raises(ValueError):
        example_claim.evaluate([1, 1])


def test_variable_degrees(example_claim):
    assert example_claim.variable_degrees() == [3, 1, 1]
    assert example_claim.degree == 3


def test_univariate_basics(small_field):
    h = UnivariatePolynomial.from_sparse(small_field, [(0, 1), (3, 2), (3, 0), (1, 0)])
    assert h.degree == 3
    assert h.coefficients == {0: small_field.element(1), 3: small_field.element(2)}
    assert h.evaluate(2) == 17
    assert h.coefficient(1) == 0

    zero = UnivariatePolynomial.zero(small_field)
    assert zero.is_zero()
    assert zero.degree == 0
    assert zero.evaluate(5) == 0


def test_univariate_addition_cancels(small_field):
    a = UnivariatePolynomial(small_field, {0: 1, 2: 5})
    b = UnivariatePolynomial(small_field, {2: -5, 1: 3})
    total = a + b
    assert total == UnivariatePolynomial(small_field, {0: 1, 1: 3})
    assert total.degree == 1


def test_parse_polynomial(field, example_claim):
    parsed = parse_polynomial("2*x0^3 + x0*x2 + x1*x2", field)
    assert parsed.num_vars == 3
    assert parsed == example_claim


def test_parse_signs_and_constants(small_field):
    poly = parse_polynomial("-x0 + 3*x1^2 - 4", small_field)
    assert poly.evaluate([1, 2]) == -1 + 12 - 4
    assert parse_polynomial("x0", small_field, num_vars=4).num_vars == 4


@pytest.mark.parametrize("text", ["", "2*y0", "x0 +", "x0**2", "x1^a", "²*x0", "x²", "x0^²", "٣*x1"])
def test_parse_rejects_garbage(small_field, text):
    with pytest.raises(MalformedClaimError):
        parse_polynomial(text, small_field)


def test_parse_rejects_variable_beyond_declared_count(small_field):
    with pytest.raises(MalformedClaimError):
        parse_polynomial("x0*x3", small_field, num_vars=2)
