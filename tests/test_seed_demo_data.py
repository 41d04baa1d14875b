from io import StringIO

import pytest
from django.core.management import call_command

from apps.expenses.models import Expense
from apps.groups.models import GroupMember


def seed(*args):
    out = StringIO()
    call_command('seed_demo_data', *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
def test_seed_creates_trip_with_balanced_expenses():
    output = seed()

    assert Expense.objects.count() == 4
    for expense in Expense.objects.prefetch_related('splits'):
        assert sum(s.amount for s in expense.splits.all()) == expense.amount
    assert set(GroupMember.objects.values_list('role', flat=True)) == {'OWNER', 'ADMIN', 'MEMBER', 'VIEWER'}
    assert 'Suggested settlements:' in output
    assert '->' in output


@pytest.mark.django_db
def test_seed_is_idempotent():
    seed()
    seed()
    assert Expense.objects.count() == 4

    seed('--reset')
    assert Expense.objects.count() == 4
