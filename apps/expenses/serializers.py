"""
Serializers for the Expenses app.
All output uses camelCase to match the web client.
"""
import logging

from django.db import transaction
from rest_framework import exceptions, serializers

from apps.expenses.models import Expense, ExpenseSplit, SplitType
from apps.expenses.permissions import can_create_expense
from apps.expenses.services.split_calculator import (
    calculate_equal_splits,
    calculate_percentage_splits,
    validate_custom_splits,
    validate_percentage_total,
)
from apps.groups.models import GroupMember
from apps.groups.permissions import get_membership
from apps.trips.models import Trip
from common.exceptions import ConflictError

logger = logging.getLogger(__name__)

MONEY_FIELD = {'max_digits': 12, 'decimal_places': 2}


class ExpenseSplitSerializer(serializers.ModelSerializer):
    expenseId = serializers.CharField(source='expense_id', read_only=True)
    userId = serializers.CharField(source='user_id', read_only=True)
    userName = serializers.CharField(source='user.display_name', read_only=True)
    splitType = serializers.CharField(source='split_type', read_only=True)
    isPaid = serializers.BooleanField(source='is_paid', read_only=True)
    paidAt = serializers.DateTimeField(source='paid_at', read_only=True)

    class Meta:
        model = ExpenseSplit
        fields = ['id', 'expenseId', 'userId', 'userName', 'splitType', 'amount', 'isPaid', 'paidAt']
        read_only_fields = fields


class ExpenseSerializer(serializers.ModelSerializer):
    tripId = serializers.CharField(source='trip_id', read_only=True)
    paidBy = serializers.CharField(source='paid_by_id', read_only=True)
    paidByName = serializers.CharField(source='paid_by.display_name', read_only=True)
    paidAt = serializers.DateTimeField(source='paid_at', read_only=True)
    splitType = serializers.CharField(source='split_type', read_only=True)
    receiptUrl = serializers.URLField(source='receipt_url', read_only=True, allow_blank=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    splits = ExpenseSplitSerializer(many=True, read_only=True)

    class Meta:
        model = Expense
        fields = [
            'id', 'tripId', 'title', 'description', 'category', 'amount', 'currency',
            'paidBy', 'paidByName', 'paidAt', 'splitType', 'receiptUrl',
            'createdAt', 'updatedAt', 'splits',
        ]
        read_only_fields = fields


class CustomSplitInputSerializer(serializers.Serializer):
    userId = serializers.UUIDField()
    amount = serializers.DecimalField(**MONEY_FIELD)

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError('Split amount must be positive.')
        return value


class PercentageSplitInputSerializer(serializers.Serializer):
    userId = serializers.UUIDField()
    percentage = serializers.DecimalField(max_digits=7, decimal_places=4, max_value=100)

    def validate_percentage(self, value):
        if value <= 0:
            raise serializers.ValidationError('Percentage must be positive.')
        return value


class ExpenseCreateSerializer(serializers.Serializer):
    """
    Creates an expense and its splits.

    ``splitWith`` is required for EQUAL, ``customSplits`` for CUSTOM and
    ``percentageSplits`` for PERCENTAGE.
    """
    tripId = serializers.UUIDField()
    title = serializers.CharField(min_length=3, max_length=200)
    description = serializers.CharField(max_length=1000, required=False, allow_blank=True, default='')
    category = serializers.ChoiceField(choices=Expense.Category.choices, default=Expense.Category.OTHER)
    amount = serializers.DecimalField(**MONEY_FIELD)
    currency = serializers.CharField(min_length=3, max_length=3, default='USD')
    paidAt = serializers.DateTimeField(required=False)
    receiptUrl = serializers.URLField(max_length=500, required=False, allow_blank=True, default='')
    splitType = serializers.ChoiceField(choices=SplitType.choices, default=SplitType.EQUAL)
    splitWith = serializers.ListField(child=serializers.UUIDField(), required=False, min_length=1)
    customSplits = CustomSplitInputSerializer(many=True, required=False)
    percentageSplits = PercentageSplitInputSerializer(many=True, required=False)

    required_lists = {
        SplitType.EQUAL: 'splitWith',
        SplitType.CUSTOM: 'customSplits',
        SplitType.PERCENTAGE: 'percentageSplits',
    }

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError('Amount must be positive.')
        return value

    def validate_currency(self, value):
        return value.upper()

    def validate(self, attrs):
        user = self.context['request'].user

        try:
            trip = Trip.objects.select_related('group').get(id=attrs['tripId'])
        except Trip.DoesNotExist:
            raise serializers.ValidationError({'tripId': 'Trip not found.'})

        membership = get_membership(trip.group_id, user)
        if membership is None:
            raise serializers.ValidationError({'tripId': 'You must be a member of this trip group.'})
        if not can_create_expense(membership.role):
            raise exceptions.PermissionDenied('Insufficient permissions to create expenses.')

        split_type = attrs['splitType']
        list_field = self.required_lists[split_type]
        entries = attrs.get(list_field)
        if not entries:
            raise serializers.ValidationError({
                'splitType': (
                    'customSplits required for CUSTOM, splitWith required for EQUAL, '
                    'percentageSplits required for PERCENTAGE.'
                ),
            })

        if split_type == SplitType.EQUAL:
            user_ids = list(entries)
        else:
            user_ids = [e['userId'] for e in entries]

        if len(set(user_ids)) != len(user_ids):
            raise serializers.ValidationError({list_field: 'Each user may appear only once.'})

        member_count = GroupMember.objects.filter(
            group_id=trip.group_id,
            user_id__in=user_ids,
        ).count()
        if member_count != len(user_ids):
            raise serializers.ValidationError({list_field: 'All split users must be members of the trip group.'})

        if split_type == SplitType.CUSTOM:
            try:
                shares = validate_custom_splits(
                    attrs['amount'],
                    [{'user_id': e['userId'], 'amount': e['amount']} for e in entries],
                )
            except ValueError:
                raise serializers.ValidationError({'customSplits': 'Sum of custom splits must equal total amount.'})
        elif split_type == SplitType.PERCENTAGE:
            percentage_splits = [
                {'user_id': e['userId'], 'percentage': e['percentage']} for e in entries
            ]
            try:
                validate_percentage_total(percentage_splits)
            except ValueError:
                raise serializers.ValidationError({'percentageSplits': 'Sum of percentages must equal 100.'})
            shares = calculate_percentage_splits(attrs['amount'], percentage_splits)
        else:
            shares = calculate_equal_splits(attrs['amount'], user_ids)

        attrs['trip'] = trip
        attrs['shares'] = shares
        return attrs

    def create(self, validated_data):
        user = self.context['request'].user
        split_type = validated_data['splitType']
        fields = {}
        if 'paidAt' in validated_data:
            fields['paid_at'] = validated_data['paidAt']

        with transaction.atomic():
            expense = Expense.objects.create(
                trip=validated_data['trip'],
                title=validated_data['title'],
                description=validated_data.get('description', ''),
                category=validated_data['category'],
                amount=validated_data['amount'],
                currency=validated_data['currency'],
                split_type=split_type,
                paid_by=user,
                receipt_url=validated_data.get('receiptUrl', ''),
                **fields,
            )
            ExpenseSplit.objects.bulk_create([
                ExpenseSplit(
                    expense=expense,
                    user_id=share['user_id'],
                    split_type=split_type,
                    amount=share['amount'],
                    position=position,
                )
                for position, share in enumerate(validated_data['shares'])
            ])

        logger.info(
            'Expense %s (%s %s, %s) created by %s with %d splits',
            expense.id,
            expense.currency,
            expense.amount,
            split_type,
            user.id,
            len(validated_data['shares']),
        )
        return expense


class ExpenseUpdateSerializer(serializers.Serializer):
    """
    Partial update of an expense.

    ``clientUpdatedAt`` is the ``updatedAt`` value the client last saw; if
    the expense changed since, the update is rejected with a conflict.
    """
    title = serializers.CharField(min_length=3, max_length=200, required=False)
    description = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=Expense.Category.choices, required=False)
    amount = serializers.DecimalField(required=False, **MONEY_FIELD)
    paidAt = serializers.DateTimeField(required=False)
    receiptUrl = serializers.URLField(max_length=500, required=False, allow_blank=True)
    clientUpdatedAt = serializers.DateTimeField(required=False)

    field_map = {
        'title': 'title',
        'description': 'description',
        'category': 'category',
        'amount': 'amount',
        'paidAt': 'paid_at',
        'receiptUrl': 'receipt_url',
    }

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError('Amount must be positive.')
        return value

    def update(self, instance, validated_data):
        client_updated_at = validated_data.pop('clientUpdatedAt', None)

        with transaction.atomic():
            expense = Expense.objects.select_for_update().get(pk=instance.pk)

            # Timestamps are exchanged with second precision
            if client_updated_at is not None and (
                expense.updated_at.replace(microsecond=0)
                > client_updated_at.replace(microsecond=0)
            ):
                logger.info('Rejected stale update of expense %s', expense.id)
                raise ConflictError('This expense was modified by someone else. Reload and try again.')

            new_amount = validated_data.get('amount')
            if new_amount is not None and new_amount != expense.amount:
                self._resplit(expense, new_amount)

            for key, value in validated_data.items():
                setattr(expense, self.field_map[key], value)
            expense.save()

        return expense

    def _resplit(self, expense, new_amount):
        if expense.split_type != SplitType.EQUAL:
            raise serializers.ValidationError({
                'amount': f'The amount of a {expense.split_type} expense cannot be changed; recreate it instead.',
            })

        splits = list(expense.splits.order_by('position'))
        shares = calculate_equal_splits(new_amount, [s.user_id for s in splits])
        for split, share in zip(splits, shares):
            split.amount = share['amount']
        ExpenseSplit.objects.bulk_update(splits, ['amount'])


class SplitUpdateSerializer(serializers.Serializer):
    isPaid = serializers.BooleanField()


class BalanceSerializer(serializers.Serializer):
    userId = serializers.CharField(source='user_id')
    userName = serializers.CharField(source='user_name')
    totalPaid = serializers.DecimalField(source='total_paid', **MONEY_FIELD)
    totalOwed = serializers.DecimalField(source='total_owed', **MONEY_FIELD)
    balance = serializers.DecimalField(**MONEY_FIELD)


class SettlementPartySerializer(serializers.Serializer):
    userId = serializers.CharField(source='user_id')
    userName = serializers.CharField(source='user_name')


class SettlementSerializer(serializers.Serializer):
    to = SettlementPartySerializer()
    amount = serializers.DecimalField(**MONEY_FIELD)

    def get_fields(self):
        # ``from`` is a keyword, so it cannot be declared as an attribute
        fields = super().get_fields()
        return {'from': SettlementPartySerializer(), **fields}


class SettlementSummarySerializer(serializers.Serializer):
    totalTransactions = serializers.IntegerField(source='total_transactions')
    totalAmount = serializers.DecimalField(source='total_amount', **MONEY_FIELD)


class SettlementResponseSerializer(serializers.Serializer):
    settlements = SettlementSerializer(many=True)
    summary = SettlementSummarySerializer()
