"""
Models for the Expenses app.
"""
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from common.models import TimestampedModel


class SplitType(models.TextChoices):
    EQUAL = 'EQUAL', 'Equal'
    CUSTOM = 'CUSTOM', 'Custom Amount'
    PERCENTAGE = 'PERCENTAGE', 'Percentage'


class Expense(TimestampedModel):
    """
    An expense paid by one member of a trip and shared among several.
    """
    class Category(models.TextChoices):
        ACCOMMODATION = 'ACCOMMODATION', 'Accommodation'
        TRANSPORT = 'TRANSPORT', 'Transport'
        FOOD = 'FOOD', 'Food & Drinks'
        ACTIVITIES = 'ACTIVITIES', 'Activities'
        SHOPPING = 'SHOPPING', 'Shopping'
        OTHER = 'OTHER', 'Other'

    SplitType = SplitType

    trip = models.ForeignKey(
        'trips.Trip',
        on_delete=models.CASCADE,
        related_name='expenses',
    )
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)],
    )
    currency = models.CharField(
        max_length=3,
        default='USD',
        help_text='ISO 4217 currency code.',
    )
    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        default=Category.OTHER,
        db_index=True,
    )
    split_type = models.CharField(
        max_length=20,
        choices=SplitType.choices,
        default=SplitType.EQUAL,
        help_text='Fixed when the expense is created.',
    )
    paid_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='paid_expenses',
    )
    paid_at = models.DateTimeField(default=timezone.now)
    receipt_url = models.URLField(max_length=500, blank=True, default='')

    class Meta:
        db_table = 'expenses'
        ordering = ['-paid_at', '-created_at']

    def __str__(self):
        return f'{self.title} - {self.currency} {self.amount}'


class ExpenseSplit(TimestampedModel):
    """
    One participant's share of an expense.
    """
    expense = models.ForeignKey(
        Expense,
        on_delete=models.CASCADE,
        related_name='splits',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='expense_splits',
    )
    split_type = models.CharField(
        max_length=20,
        choices=SplitType.choices,
        default=SplitType.EQUAL,
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text='Amount owed by this user in the expense currency.',
    )
    position = models.PositiveIntegerField(
        default=0,
        help_text='Order of the participant when the split was calculated.',
    )
    is_paid = models.BooleanField(default=False, db_index=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'expense_splits'
        unique_together = ['expense', 'user']
        ordering = ['position']

    def __str__(self):
        return f'{self.user} owes {self.amount} for {self.expense}'
