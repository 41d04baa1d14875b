"""
Views for the Expenses app.
"""
import logging

from django.shortcuts import get_object_or_404
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, generics, mixins, status, viewsets
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.expenses.filters import ExpenseFilter
from apps.expenses.models import Expense, ExpenseSplit
from apps.expenses.permissions import IsExpenseGroupMember
from apps.expenses.serializers import (
    BalanceSerializer,
    ExpenseCreateSerializer,
    ExpenseSerializer,
    ExpenseSplitSerializer,
    ExpenseUpdateSerializer,
    SettlementResponseSerializer,
    SplitUpdateSerializer,
)
from apps.expenses.services.balance_aggregator import get_trip_balances
from apps.expenses.services.settlement_engine import compute_settlements
from apps.groups.permissions import get_membership
from apps.trips.models import Trip

logger = logging.getLogger(__name__)


def get_member_trip(trip_id, user):
    """Return the trip if *user* belongs to its group; 404/403 otherwise."""
    trip = get_object_or_404(Trip, id=trip_id)
    if get_membership(trip.group_id, user) is None:
        raise PermissionDenied('You are not a member of this group.')
    return trip


class ExpenseViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for Expense CRUD operations. Listing is trip-scoped, see
    ``TripExpenseListView``.

    create: POST   /api/v1/expenses/
    read:   GET    /api/v1/expenses/{id}/
    update: PATCH  /api/v1/expenses/{id}/
    delete: DELETE /api/v1/expenses/{id}/
    """
    permission_classes = [IsAuthenticated, IsExpenseGroupMember]
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        return Expense.objects.filter(
            trip__group__members__user=self.request.user,
        ).select_related('paid_by', 'trip').prefetch_related(
            'splits__user'
        ).distinct()

    def get_serializer_class(self):
        if self.action == 'create':
            return ExpenseCreateSerializer
        if self.action in ('update', 'partial_update'):
            return ExpenseUpdateSerializer
        return ExpenseSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        expense = serializer.save()
        return Response(
            {
                'success': True,
                'data': ExpenseSerializer(expense).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = ExpenseSerializer(instance)
        return Response({'success': True, 'data': serializer.data})

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = ExpenseUpdateSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        expense = serializer.save()
        expense = self.get_queryset().get(pk=expense.pk)
        return Response({'success': True, 'data': ExpenseSerializer(expense).data})

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        logger.info('Expense %s deleted by %s', instance.id, request.user.id)
        instance.delete()
        return Response(
            {'success': True, 'message': 'Expense deleted.'},
            status=status.HTTP_200_OK,
        )


class ExpenseSplitUpdateView(APIView):
    """
    Mark a split as paid or unpaid. Allowed for the split owner and the
    expense payer.

    PATCH /api/v1/expenses/{expense_id}/splits/{split_id}/
    Body: {"isPaid": true}
    """
    permission_classes = [IsAuthenticated]

    def patch(self, request, expense_pk=None, pk=None):
        expense = get_object_or_404(
            Expense.objects.select_related('trip'),
            id=expense_pk,
        )
        if get_membership(expense.trip.group_id, request.user) is None:
            raise PermissionDenied('You are not a member of this group.')

        split = get_object_or_404(
            ExpenseSplit.objects.select_related('user'),
            id=pk,
            expense=expense,
        )
        if request.user.id not in (split.user_id, expense.paid_by_id):
            raise PermissionDenied('Only the split owner or payer can update payment status.')

        serializer = SplitUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        split.is_paid = serializer.validated_data['isPaid']
        split.paid_at = timezone.now() if split.is_paid else None
        split.save(update_fields=['is_paid', 'paid_at', 'updated_at'])

        return Response({'success': True, 'data': ExpenseSplitSerializer(split).data})


class TripExpenseListView(generics.ListAPIView):
    """
    List expenses for a trip.

    GET /api/v1/trips/{trip_id}/expenses/?category=&paidBy=&minAmount=&maxAmount=
    """
    serializer_class = ExpenseSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = ExpenseFilter
    search_fields = ['title', 'description']
    ordering_fields = ['paid_at', 'amount', 'created_at']

    def get_queryset(self):
        trip = get_member_trip(self.kwargs['trip_pk'], self.request.user)
        return Expense.objects.filter(trip=trip).select_related(
            'paid_by', 'trip',
        ).prefetch_related('splits__user')

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        serializer = self.get_serializer(queryset, many=True)
        return Response({'success': True, 'data': serializer.data})


class TripBalancesView(APIView):
    """
    Net balance of every group member for a trip.

    GET /api/v1/trips/{trip_id}/expenses/balances/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, trip_pk=None):
        trip = get_member_trip(trip_pk, request.user)
        balances = get_trip_balances(trip)
        return Response({
            'success': True,
            'data': BalanceSerializer(balances, many=True).data,
        })


class TripSettlementsView(APIView):
    """
    Suggested payments that settle every balance on a trip.

    GET /api/v1/trips/{trip_id}/expenses/settlements/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, trip_pk=None):
        trip = get_member_trip(trip_pk, request.user)
        result = compute_settlements(get_trip_balances(trip))
        return Response({
            'success': True,
            'data': SettlementResponseSerializer(result).data,
        })
