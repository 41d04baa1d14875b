"""
Views for the Trips app.
"""
import logging

from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.trips.models import Trip
from apps.trips.permissions import IsTripGroupMember
from apps.trips.serializers import (
    TripCreateSerializer,
    TripSerializer,
    TripUpdateSerializer,
)

logger = logging.getLogger(__name__)


class TripViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Trip CRUD operations.

    list:   GET    /api/v1/trips/?group=<group_id>&status=<status>
    create: POST   /api/v1/trips/
    read:   GET    /api/v1/trips/{id}/
    update: PATCH  /api/v1/trips/{id}/
    delete: DELETE /api/v1/trips/{id}/
    """
    permission_classes = [IsAuthenticated, IsTripGroupMember]

    def get_queryset(self):
        queryset = Trip.objects.filter(
            group__members__user=self.request.user,
            group__is_active=True,
        ).select_related('created_by', 'group').distinct()

        group_id = self.request.query_params.get('group')
        if group_id:
            queryset = queryset.filter(group_id=group_id)

        trip_status = self.request.query_params.get('status')
        if trip_status:
            queryset = queryset.filter(status=trip_status)

        return queryset

    def get_serializer_class(self):
        if self.action == 'create':
            return TripCreateSerializer
        if self.action in ('update', 'partial_update'):
            return TripUpdateSerializer
        return TripSerializer

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = TripSerializer(queryset, many=True)
        return Response({'success': True, 'data': serializer.data})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        trip = serializer.save()
        logger.info('Trip %s created in group %s', trip.id, trip.group_id)
        return Response(
            {
                'success': True,
                'data': TripSerializer(trip).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = TripSerializer(instance)
        return Response({'success': True, 'data': serializer.data})

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = TripUpdateSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({'success': True, 'data': TripSerializer(instance).data})

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        instance.delete()
        return Response(
            {'success': True, 'message': 'Trip deleted.'},
            status=status.HTTP_200_OK,
        )
