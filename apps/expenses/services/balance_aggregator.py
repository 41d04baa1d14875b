"""
Net balance calculation for the members of a trip.

``net[user] = total_paid - total_owed``, where *total_paid* is the sum of
expenses the user fronted and *total_owed* the sum of all of their splits,
paid or not. A positive balance means others owe the user money.
"""
import logging
from collections import defaultdict

from django.db import transaction

from apps.expenses.services.money import format_amount, from_cents, to_cents

logger = logging.getLogger(__name__)


def aggregate_balances(members, expenses, splits):
    """
    Compute one balance row per member.

    Parameters
    ----------
    members : list
        ``[{'user_id': ..., 'user_name': str}]`` in display order.
    expenses : list
        ``[{'amount': Decimal, 'paid_by': user_id}]`` for the trip.
    splits : list
        ``[{'amount': Decimal, 'user_id': ...}]`` for every expense of the
        trip.

    Returns
    -------
    list
        ``[{'user_id', 'user_name', 'total_paid', 'total_owed', 'balance'}]``
        with ``Decimal`` amounts, including members with no activity.
    """
    paid = defaultdict(int)
    owed = defaultdict(int)

    for expense in expenses:
        paid[expense['paid_by']] += to_cents(expense['amount'])

    for split in splits:
        owed[split['user_id']] += to_cents(split['amount'])

    balances = []
    net_total = 0
    for member in members:
        uid = member['user_id']
        net = paid[uid] - owed[uid]
        net_total += net
        balances.append({
            'user_id': uid,
            'user_name': member['user_name'],
            'total_paid': from_cents(paid[uid]),
            'total_owed': from_cents(owed[uid]),
            'balance': from_cents(net),
        })

    if net_total != 0:
        logger.warning(
            'Balances for %d members do not net to zero (off by %s).',
            len(members),
            format_amount(net_total),
        )

    return balances


def get_trip_balances(trip):
    """
    Load a trip's members, expenses and splits and aggregate balances.

    Both queries run inside a single transaction block so the expenses and
    splits are read together.
    """
    from apps.expenses.models import Expense, ExpenseSplit
    from apps.groups.models import GroupMember

    memberships = GroupMember.objects.filter(
        group_id=trip.group_id,
    ).select_related('user').order_by('joined_at')

    members = [
        {'user_id': m.user_id, 'user_name': m.user.display_name}
        for m in memberships
    ]

    with transaction.atomic():
        expenses = [
            {'amount': amount, 'paid_by': paid_by}
            for amount, paid_by in Expense.objects.filter(
                trip=trip,
            ).values_list('amount', 'paid_by_id')
        ]
        splits = [
            {'amount': amount, 'user_id': user_id}
            for amount, user_id in ExpenseSplit.objects.filter(
                expense__trip=trip,
            ).values_list('amount', 'user_id')
        ]

    logger.debug(
        'Aggregating balances for trip %s: %d members, %d expenses, %d splits.',
        trip.id,
        len(members),
        len(expenses),
        len(splits),
    )
    return aggregate_balances(members, expenses, splits)
