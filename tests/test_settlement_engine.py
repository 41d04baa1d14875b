import copy
import logging
import random
from decimal import Decimal

from apps.expenses.services.balance_aggregator import aggregate_balances
from apps.expenses.services.settlement_engine import compute_settlements
from apps.expenses.services.split_calculator import calculate_equal_splits


def balance(user_id, amount):
    return {'user_id': user_id, 'user_name': user_id.title(), 'balance': Decimal(amount)}


def transfers(result):
    return [
        (s['from']['user_id'], s['to']['user_id'], str(s['amount']))
        for s in result['settlements']
    ]


def test_one_creditor_two_debtors():
    result = compute_settlements([
        balance('alice', '66.67'),
        balance('bob', '-33.33'),
        balance('charlie', '-33.34'),
    ])

    # Largest debtor is matched first
    assert transfers(result) == [
        ('charlie', 'alice', '33.34'),
        ('bob', 'alice', '33.33'),
    ]
    assert result['summary'] == {
        'total_transactions': 2,
        'total_amount': Decimal('66.67'),
    }
    assert result['settlements'][0]['from']['user_name'] == 'Charlie'


def test_all_zero_balances():
    result = compute_settlements([balance('alice', '0'), balance('bob', '0.00')])
    assert result['settlements'] == []
    assert result['summary']['total_transactions'] == 0
    assert result['summary']['total_amount'] == Decimal('0.00')


def test_balances_within_a_cent_are_treated_as_settled():
    result = compute_settlements([balance('alice', '0.01'), balance('bob', '-0.01')])
    assert result['settlements'] == []


def test_two_creditors_two_debtors():
    result = compute_settlements([
        balance('alice', '50'),
        balance('bob', '30'),
        balance('charlie', '-40'),
        balance('dave', '-40'),
    ])

    assert transfers(result) == [
        ('charlie', 'alice', '40.00'),
        ('dave', 'alice', '10.00'),
        ('dave', 'bob', '30.00'),
    ]
    assert result['summary']['total_amount'] == Decimal('80.00')
    assert result['summary']['total_transactions'] <= 2 + 2 - 1


def test_equal_balances_keep_input_order():
    result = compute_settlements([
        balance('alice', '20'),
        balance('bob', '-10'),
        balance('charlie', '-10'),
    ])
    assert transfers(result) == [
        ('bob', 'alice', '10.00'),
        ('charlie', 'alice', '10.00'),
    ]


def test_same_input_gives_same_output_and_is_not_mutated():
    balances = [
        balance('alice', '12.34'),
        balance('bob', '-5.67'),
        balance('charlie', '-6.67'),
    ]
    snapshot = copy.deepcopy(balances)

    assert compute_settlements(balances) == compute_settlements(balances)
    assert balances == snapshot


def test_unbalanced_input_leaves_residual_and_logs(caplog):
    with caplog.at_level(logging.WARNING):
        result = compute_settlements([balance('alice', '50'), balance('bob', '-30')])

    assert transfers(result) == [('bob', 'alice', '30.00')]
    assert 'do not match' in caplog.text


def test_settlements_discharge_aggregated_balances():
    rng = random.Random(20240601)
    members = [{'user_id': f'user{i}', 'user_name': f'User {i}'} for i in range(6)]
    ids = [m['user_id'] for m in members]

    for _ in range(25):
        expenses = []
        splits = []
        for _ in range(rng.randint(1, 8)):
            amount = Decimal(rng.randint(100, 50000)) / 100
            participants = rng.sample(ids, rng.randint(1, len(ids)))
            expenses.append({'amount': amount, 'paid_by': rng.choice(ids)})
            splits.extend(calculate_equal_splits(amount, participants))

        balances = aggregate_balances(members, expenses, splits)
        assert sum(b['balance'] for b in balances) == 0

        result = compute_settlements(balances)
        creditors = [b for b in balances if b['balance'] > Decimal('0.01')]
        debtors = [b for b in balances if b['balance'] < Decimal('-0.01')]
        owed = sum((b['balance'] for b in balances if b['balance'] > 0), Decimal('0'))

        assert result['summary']['total_transactions'] == len(result['settlements'])
        assert result['summary']['total_transactions'] <= max(len(creditors) + len(debtors) - 1, 0)
        assert result['summary']['total_amount'] == sum(
            (s['amount'] for s in result['settlements']), Decimal('0'),
        )
        # Only one-cent leftovers may go unsettled
        assert 0 <= owed - result['summary']['total_amount'] <= Decimal('0.01') * len(members)

        remaining = {b['user_id']: b['balance'] for b in balances}
        for s in result['settlements']:
            assert s['amount'] > 0
            remaining[s['from']['user_id']] += s['amount']
            remaining[s['to']['user_id']] -= s['amount']
        assert all(abs(v) <= Decimal('0.01') * len(members) for v in remaining.values())
