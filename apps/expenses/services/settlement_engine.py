"""
Settlement suggestions using greedy largest-creditor / largest-debtor matching.

Given the net balances of a trip's members, this module pairs the member
who is owed the most with the member who owes the most, emits a payment
for the smaller of the two amounts, and repeats until one side runs out.

This is a heuristic: it produces at most ``creditors + debtors - 1``
transactions but not necessarily the global minimum.
"""
import logging

from apps.expenses.services.money import format_amount, from_cents, to_cents

logger = logging.getLogger(__name__)

# Balances within one cent of zero count as settled.
SETTLED_THRESHOLD_CENTS = 1


def compute_settlements(balances):
    """
    Turn net balances into pay-from / pay-to transactions.

    Algorithm
    ---------
    1. Split members into *creditors* (balance > 0.01) and *debtors*
       (balance < -0.01); everyone else is already settled.
    2. Sort both lists by magnitude, largest first. The sort is stable so
       equal balances keep their input order.
    3. While both lists are non-empty, match the head creditor with the
       head debtor for ``min(credit, debt)``, emitting a transaction when
       that amount exceeds 0.01. Drop whichever side falls below 0.01.

    Parameters
    ----------
    balances : list
        ``[{'user_id': ..., 'user_name': str, 'balance': Decimal}]``.

    Returns
    -------
    dict
        ``{'settlements': [{'from': {...}, 'to': {...}, 'amount': Decimal}],
        'summary': {'total_transactions': int, 'total_amount': Decimal}}``
    """
    creditors = []
    debtors = []

    for entry in balances:
        cents = to_cents(entry['balance'])
        party = {
            'user_id': entry['user_id'],
            'user_name': entry['user_name'],
            'remaining': abs(cents),
        }
        if cents > SETTLED_THRESHOLD_CENTS:
            creditors.append(party)
        elif cents < -SETTLED_THRESHOLD_CENTS:
            debtors.append(party)

    total_credit = sum(c['remaining'] for c in creditors)
    total_debt = sum(d['remaining'] for d in debtors)
    if total_credit != total_debt:
        logger.warning(
            'Credits (%s) and debts (%s) do not match; residual debt will remain.',
            format_amount(total_credit),
            format_amount(total_debt),
        )

    creditors.sort(key=lambda p: p['remaining'], reverse=True)
    debtors.sort(key=lambda p: p['remaining'], reverse=True)

    settlements = []
    total_settled = 0

    while creditors and debtors:
        creditor = creditors[0]
        debtor = debtors[0]

        settle = min(creditor['remaining'], debtor['remaining'])

        if settle > SETTLED_THRESHOLD_CENTS:
            settlements.append({
                'from': {
                    'user_id': debtor['user_id'],
                    'user_name': debtor['user_name'],
                },
                'to': {
                    'user_id': creditor['user_id'],
                    'user_name': creditor['user_name'],
                },
                'amount': from_cents(settle),
            })
            total_settled += settle

        creditor['remaining'] -= settle
        debtor['remaining'] -= settle

        if creditor['remaining'] < SETTLED_THRESHOLD_CENTS:
            creditors.pop(0)
        if debtor['remaining'] < SETTLED_THRESHOLD_CENTS:
            debtors.pop(0)

    logger.debug(
        'Computed %d settlements totalling %s.',
        len(settlements),
        format_amount(total_settled),
    )

    return {
        'settlements': settlements,
        'summary': {
            'total_transactions': len(settlements),
            'total_amount': from_cents(total_settled),
        },
    }
