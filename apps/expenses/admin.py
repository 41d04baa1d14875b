"""
Admin configuration for the Expenses app.
"""
from django.contrib import admin

from apps.expenses.models import Expense, ExpenseSplit
from apps.expenses.services.money import sum_amounts


class ExpenseSplitInline(admin.TabularInline):
    model = ExpenseSplit
    extra = 0
    ordering = ['position']


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = [
        'title',
        'amount',
        'splits_total',
        'currency',
        'category',
        'split_type',
        'paid_by',
        'trip',
        'paid_at',
    ]
    list_filter = ['category', 'split_type', 'currency', 'paid_at']
    search_fields = ['title', 'description', 'paid_by__email']
    readonly_fields = ['split_type', 'created_at', 'updated_at']
    inlines = [ExpenseSplitInline]

    def get_queryset(self, request):
        return super().get_queryset(request).prefetch_related('splits')

    @admin.display(description='Splits total')
    def splits_total(self, obj):
        return sum_amounts(s.amount for s in obj.splits.all())


@admin.register(ExpenseSplit)
class ExpenseSplitAdmin(admin.ModelAdmin):
    list_display = ['expense', 'user', 'amount', 'split_type', 'is_paid', 'paid_at']
    list_filter = ['is_paid', 'split_type']
    search_fields = ['user__email', 'expense__title']
