"""
Money helpers shared by the split, balance and settlement services.

Amounts cross the service boundary as ``Decimal`` values with at most two
fractional digits. Inside the services every calculation is done on
integer minor units (cents) so sums always reconcile exactly.
"""
from decimal import Decimal, InvalidOperation

CENT = Decimal('0.01')


def to_cents(value):
    """
    Convert a monetary value to an integer number of cents.

    Parameters
    ----------
    value : Decimal | str | int | float
        The amount to convert.

    Returns
    -------
    int
        The amount in cents.

    Raises
    ------
    ValueError
        If *value* is not a finite number or has more than two
        fractional digits.
    """
    if isinstance(value, bool):
        raise ValueError(f'Invalid monetary amount: {value!r}.')

    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f'Invalid monetary amount: {value!r}.') from None

    if not amount.is_finite():
        raise ValueError(f'Invalid monetary amount: {value!r}.')

    cents = amount * 100
    if cents != cents.to_integral_value():
        raise ValueError(
            f'Monetary amount {value!r} has more than 2 decimal places.'
        )
    return int(cents)


def from_cents(cents):
    """Return *cents* as a ``Decimal`` with exactly two decimal places."""
    return (Decimal(cents) / 100).quantize(CENT)


def format_amount(cents):
    """Render *cents* as a fixed two-decimal string, e.g. ``'33.34'``."""
    return str(from_cents(cents))


def sum_amounts(values):
    """Sum monetary values exactly, returning a 2dp ``Decimal``."""
    return from_cents(sum(to_cents(v) for v in values))
