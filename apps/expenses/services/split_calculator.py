"""
Utilities for calculating how an expense is split among trip members.

Every function works on integer cents internally and returns a list of
``{'user_id': ..., 'amount': Decimal}`` dictionaries in the order the
participants were given, ensuring the individual shares always sum to the
original total.
"""
import logging
from decimal import ROUND_FLOOR, Decimal, InvalidOperation

from apps.expenses.services.money import from_cents, to_cents

logger = logging.getLogger(__name__)

PERCENTAGE_TOLERANCE = Decimal('0.01')


def _to_percentage(value):
    try:
        pct = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f'Invalid percentage: {value!r}.') from None
    if not pct.is_finite():
        raise ValueError(f'Invalid percentage: {value!r}.')
    return pct


def calculate_equal_splits(amount, user_ids):
    """
    Split *amount* equally among *user_ids*.

    Parameters
    ----------
    amount : Decimal | str | int | float
        The total amount to split.
    user_ids : list
        An ordered list of user IDs to split among. The last user absorbs
        the rounding remainder, so callers must pass a stable order.

    Returns
    -------
    list
        ``[{'user_id': ..., 'amount': Decimal}]``, one entry per user.
        An empty *user_ids* list yields an empty result.
    """
    if not user_ids:
        return []

    total = to_cents(amount)
    num = len(user_ids)

    # Per-person share rounded down to the cent
    base = total // num
    last_share = total - base * (num - 1)

    result = []
    for i, uid in enumerate(user_ids):
        share = last_share if i == num - 1 else base
        result.append({'user_id': uid, 'amount': from_cents(share)})

    logger.debug('Equal split of %s cents among %d users.', total, num)
    return result


def calculate_percentage_splits(amount, percentage_splits):
    """
    Split *amount* according to per-user percentages.

    Parameters
    ----------
    amount : Decimal | str | int | float
        The total amount to split.
    percentage_splits : list
        ``[{'user_id': ..., 'percentage': Decimal}]``. Percentages are
        expected to sum to 100; that is validated by the caller.

    Returns
    -------
    list
        ``[{'user_id': ..., 'amount': Decimal}]`` in input order.
    """
    if not percentage_splits:
        return []

    total = to_cents(amount)
    percentages = [_to_percentage(s['percentage']) for s in percentage_splits]

    # Each share is rounded down to the cent
    shares = [
        int((Decimal(total) * pct / 100).to_integral_value(rounding=ROUND_FLOOR))
        for pct in percentages
    ]

    remainder = total - sum(shares)
    if remainder:
        largest = 0
        for idx, pct in enumerate(percentages):
            if pct > percentages[largest]:
                largest = idx
        shares[largest] += remainder
        logger.debug(
            'Assigned %d cent remainder to %s.',
            remainder,
            percentage_splits[largest]['user_id'],
        )

    return [
        {'user_id': s['user_id'], 'amount': from_cents(share)}
        for s, share in zip(percentage_splits, shares)
    ]


def validate_percentage_total(percentage_splits, tolerance=PERCENTAGE_TOLERANCE):
    """
    Check that the percentages add up to 100 within *tolerance*.

    Raises
    ------
    ValueError
        If the total is off by *tolerance* or more.
    """
    total = sum(
        (_to_percentage(s['percentage']) for s in percentage_splits),
        Decimal('0'),
    )
    if abs(total - 100) >= tolerance:
        raise ValueError(f'Percentages must sum to 100, got {total}.')
    return total


def validate_custom_splits(amount, custom_splits):
    """
    Validate caller-supplied CUSTOM shares and return them normalised.

    The shares must add up to *amount* exactly (to the cent).

    Returns
    -------
    list
        ``[{'user_id': ..., 'amount': Decimal}]`` in input order.

    Raises
    ------
    ValueError
        If *custom_splits* is empty or does not sum to *amount*.
    """
    if not custom_splits:
        raise ValueError('custom_splits must not be empty.')

    total = to_cents(amount)
    shares = [to_cents(s['amount']) for s in custom_splits]
    if sum(shares) != total:
        raise ValueError(
            f'Split amounts must total {from_cents(total)}, '
            f'got {from_cents(sum(shares))}.'
        )

    return [
        {'user_id': s['user_id'], 'amount': from_cents(share)}
        for s, share in zip(custom_splits, shares)
    ]
