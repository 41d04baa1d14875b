"""
URL configuration for the Expenses app.

``urlpatterns`` is mounted at ``/api/v1/expenses/``; ``trip_urlpatterns``
at ``/api/v1/trips/<trip_id>/expenses/``.
"""
from django.urls import include, path
from rest_framework.routers import SimpleRouter

from apps.expenses.views import (
    ExpenseSplitUpdateView,
    ExpenseViewSet,
    TripBalancesView,
    TripExpenseListView,
    TripSettlementsView,
)

app_name = 'expenses'

# Mounted at the include root, so no API root view
router = SimpleRouter()
router.register(r'', ExpenseViewSet, basename='expense')

urlpatterns = [
    path(
        '<uuid:expense_pk>/splits/<uuid:pk>/',
        ExpenseSplitUpdateView.as_view(),
        name='expense-split-update',
    ),
    path('', include(router.urls)),
]

trip_urlpatterns = [
    path('', TripExpenseListView.as_view(), name='trip-expense-list'),
    path('balances/', TripBalancesView.as_view(), name='trip-balances'),
    path('settlements/', TripSettlementsView.as_view(), name='trip-settlements'),
]
