"""
Management command to seed demo data for the trip planner.

Creates users, a group with one member of every role, a trip, and expenses
using each split type so the balance and settlement endpoints return
something meaningful.

Usage:
    python manage.py seed_demo_data
    python manage.py seed_demo_data --reset  # wipe existing demo data first
"""
from datetime import date, datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.expenses.models import Expense, ExpenseSplit, SplitType
from apps.expenses.services.balance_aggregator import get_trip_balances
from apps.expenses.services.settlement_engine import compute_settlements
from apps.expenses.services.split_calculator import (
    calculate_equal_splits,
    calculate_percentage_splits,
    validate_custom_splits,
)
from apps.groups.models import Group, GroupMember
from apps.trips.models import Trip

User = get_user_model()

DEMO_PASSWORD = 'TripPlannerDemo1'

DEMO_USERS = [
    {'email': 'maya@tripplanner.dev', 'first': 'Maya', 'last': 'Okafor', 'role': GroupMember.Role.OWNER},
    {'email': 'lucas@tripplanner.dev', 'first': 'Lucas', 'last': 'Berg', 'role': GroupMember.Role.ADMIN},
    {'email': 'nina@tripplanner.dev', 'first': 'Nina', 'last': 'Costa', 'role': GroupMember.Role.MEMBER},
    {'email': 'omar@tripplanner.dev', 'first': 'Omar', 'last': 'Haddad', 'role': GroupMember.Role.VIEWER},
]

GROUP_NAME = 'Lisbon Long Weekend'
TRIP_NAME = 'Lisbon & Sintra'


class Command(BaseCommand):
    help = 'Seed demo data (users, a group, a trip and its expenses)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset',
            action='store_true',
            help='Delete all existing demo data before seeding',
        )

    def handle(self, *args, **options):
        if options['reset']:
            self._reset()

        with transaction.atomic():
            users = self._seed_users()
            group = self._seed_group(users)
            trip = self._seed_trip(group, users['maya@tripplanner.dev'])
            self._seed_expenses(trip, users)

        result = compute_settlements(get_trip_balances(trip))

        self.stdout.write(self.style.SUCCESS('\nDemo data seeded.\n'))
        self.stdout.write('Suggested settlements:')
        for settlement in result['settlements']:
            self.stdout.write(
                f"  {settlement['from']['user_name']} -> {settlement['to']['user_name']}: "
                f"{settlement['amount']}"
            )
        self.stdout.write('\nDemo login credentials:')
        for u in DEMO_USERS:
            self.stdout.write(f'  {u["email"]} / {DEMO_PASSWORD}')

    def _reset(self):
        self.stdout.write('Resetting demo data...')
        demo_users = User.objects.filter(email__in=[u['email'] for u in DEMO_USERS])
        Group.objects.filter(created_by__in=demo_users).delete()
        demo_users.delete()

    def _seed_users(self):
        users = {}
        for data in DEMO_USERS:
            user, created = User.objects.get_or_create(
                email=data['email'],
                defaults={
                    'username': data['email'].split('@')[0],
                    'first_name': data['first'],
                    'last_name': data['last'],
                },
            )
            if created:
                user.set_password(DEMO_PASSWORD)
                user.save()
            users[data['email']] = user
            self.stdout.write(f'  {"created" if created else "exists"}: {data["email"]}')
        return users

    def _seed_group(self, users):
        owner = users['maya@tripplanner.dev']
        group, _ = Group.objects.get_or_create(
            name=GROUP_NAME,
            created_by=owner,
            defaults={'description': 'Four friends, three days, too many pasteis de nata.'},
        )
        for data in DEMO_USERS:
            GroupMember.objects.get_or_create(
                group=group,
                user=users[data['email']],
                defaults={'role': data['role']},
            )
        return group

    def _seed_trip(self, group, owner):
        trip, _ = Trip.objects.get_or_create(
            name=TRIP_NAME,
            group=group,
            defaults={
                'destination': 'Lisbon, Portugal',
                'start_date': date(2025, 5, 2),
                'end_date': date(2025, 5, 5),
                'status': Trip.Status.COMPLETED,
                'created_by': owner,
            },
        )
        return trip

    def _seed_expenses(self, trip, users):
        maya = users['maya@tripplanner.dev']
        lucas = users['lucas@tripplanner.dev']
        nina = users['nina@tripplanner.dev']

        # (title, category, amount, payer, day, split type, participants)
        expenses_data = [
            ('Apartment in Alfama', Expense.Category.ACCOMMODATION, Decimal('412.50'), maya, 2,
             SplitType.EQUAL, [maya, lucas, nina]),
            ('Train to Sintra', Expense.Category.TRANSPORT, Decimal('16.20'), lucas, 3,
             SplitType.EQUAL, [lucas, nina, maya]),
            ('Seafood dinner', Expense.Category.FOOD, Decimal('139.90'), nina, 3,
             SplitType.PERCENTAGE, [(maya, 40), (lucas, 35), (nina, 25)]),
            ('Pena Palace tickets', Expense.Category.ACTIVITIES, Decimal('60.00'), maya, 4,
             SplitType.CUSTOM, [(maya, '20.00'), (nina, '40.00')]),
        ]

        for title, category, amount, payer, day, split_type, participants in expenses_data:
            expense, created = Expense.objects.get_or_create(
                trip=trip,
                title=title,
                defaults={
                    'category': category,
                    'amount': amount,
                    'currency': 'EUR',
                    'split_type': split_type,
                    'paid_by': payer,
                    'paid_at': timezone.make_aware(datetime(2025, 5, day, 20, 0)),
                },
            )
            if created:
                shares = self._shares(amount, split_type, participants)
                ExpenseSplit.objects.bulk_create([
                    ExpenseSplit(
                        expense=expense,
                        user_id=share['user_id'],
                        split_type=split_type,
                        amount=share['amount'],
                        position=position,
                    )
                    for position, share in enumerate(shares)
                ])
            self.stdout.write(f'  {"created" if created else "exists"}: {title} ({amount})')

    def _shares(self, amount, split_type, participants):
        if split_type == SplitType.PERCENTAGE:
            return calculate_percentage_splits(amount, [
                {'user_id': user.id, 'percentage': pct} for user, pct in participants
            ])
        if split_type == SplitType.CUSTOM:
            return validate_custom_splits(amount, [
                {'user_id': user.id, 'amount': share} for user, share in participants
            ])
        return calculate_equal_splits(amount, [user.id for user in participants])
