"""
Query filters for listing a trip's expenses.
"""
import django_filters

from apps.expenses.models import Expense


class ExpenseFilter(django_filters.FilterSet):
    """
    ``?category=FOOD&paidBy=<user_id>&minAmount=10&maxAmount=50``
    """
    category = django_filters.ChoiceFilter(choices=Expense.Category.choices)
    paidBy = django_filters.UUIDFilter(field_name='paid_by')
    minAmount = django_filters.NumberFilter(field_name='amount', lookup_expr='gte')
    maxAmount = django_filters.NumberFilter(field_name='amount', lookup_expr='lte')

    class Meta:
        model = Expense
        fields = ['category', 'paidBy', 'minAmount', 'maxAmount']
