from decimal import Decimal

import pytest

from apps.expenses.services.money import format_amount, from_cents, sum_amounts, to_cents


@pytest.mark.parametrize('value, cents', [
    (Decimal('10.50'), 1050),
    ('0.01', 1),
    (42, 4200),
    (66.67, 6667),
    ('-33.33', -3333),
])
def test_to_cents(value, cents):
    assert to_cents(value) == cents


@pytest.mark.parametrize('value', ['NaN', 'inf', 'abc', None, '1.234', True])
def test_to_cents_rejects_invalid_amounts(value):
    with pytest.raises(ValueError):
        to_cents(value)


def test_from_cents_and_format():
    assert from_cents(3334) == Decimal('33.34')
    assert format_amount(-3333) == '-33.33'
    assert format_amount(0) == '0.00'
    assert format_amount(500) == '5.00'


def test_sum_amounts_avoids_float_drift():
    assert sum_amounts([0.1, 0.2]) == Decimal('0.30')
