import logging
from decimal import Decimal

from apps.expenses.services.balance_aggregator import aggregate_balances
from apps.expenses.services.split_calculator import calculate_equal_splits

MEMBERS = [
    {'user_id': 'alice', 'user_name': 'Alice'},
    {'user_id': 'bob', 'user_name': 'Bob'},
    {'user_id': 'charlie', 'user_name': 'Charlie'},
    {'user_id': 'dave', 'user_name': 'Dave'},
]


def by_user(balances):
    return {b['user_id']: b for b in balances}


def test_single_expense_split_three_ways():
    expenses = [{'amount': Decimal('100.00'), 'paid_by': 'alice'}]
    splits = calculate_equal_splits(100, ['alice', 'bob', 'charlie'])

    balances = by_user(aggregate_balances(MEMBERS, expenses, splits))

    assert balances['alice']['total_paid'] == Decimal('100.00')
    assert balances['alice']['total_owed'] == Decimal('33.33')
    assert balances['alice']['balance'] == Decimal('66.67')
    assert balances['bob']['balance'] == Decimal('-33.33')
    assert balances['charlie']['balance'] == Decimal('-33.34')


def test_members_without_activity_get_zero_rows():
    expenses = [{'amount': Decimal('10.00'), 'paid_by': 'alice'}]
    splits = calculate_equal_splits(10, ['alice', 'bob'])

    balances = aggregate_balances(MEMBERS, expenses, splits)

    assert [b['user_id'] for b in balances] == ['alice', 'bob', 'charlie', 'dave']
    dave = by_user(balances)['dave']
    assert dave['user_name'] == 'Dave'
    assert (dave['total_paid'], dave['total_owed'], dave['balance']) == (
        Decimal('0.00'), Decimal('0.00'), Decimal('0.00'),
    )


def test_balances_net_to_zero_across_many_expenses():
    expenses = []
    splits = []
    payers = ['alice', 'bob', 'charlie', 'dave', 'alice', 'bob']
    for i, payer in enumerate(payers):
        amount = Decimal('17.03') * (i + 1)
        expenses.append({'amount': amount, 'paid_by': payer})
        splits.extend(calculate_equal_splits(amount, [m['user_id'] for m in MEMBERS[: i % 4 + 1]]))

    balances = aggregate_balances(MEMBERS, expenses, splits)

    assert sum(b['balance'] for b in balances) == 0
    for b in balances:
        assert b['balance'] == b['total_paid'] - b['total_owed']


def test_balances_that_do_not_net_to_zero_log_a_warning(caplog):
    # Payer is not a member of the trip group
    expenses = [{'amount': Decimal('30.00'), 'paid_by': 'stranger'}]
    splits = calculate_equal_splits(30, ['alice', 'bob'])

    with caplog.at_level(logging.WARNING):
        balances = aggregate_balances(MEMBERS, expenses, splits)

    assert sum(b['balance'] for b in balances) == Decimal('-30.00')
    assert 'do not net to zero' in caplog.text


def test_no_expenses():
    balances = aggregate_balances(MEMBERS, [], [])
    assert all(b['balance'] == 0 for b in balances)
    assert len(balances) == len(MEMBERS)
