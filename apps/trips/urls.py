"""
URL configuration for the Trips app.
"""
from django.urls import include, path
from rest_framework.routers import SimpleRouter

from apps.trips.views import TripViewSet

app_name = 'trips'

router = SimpleRouter()
router.register(r'', TripViewSet, basename='trip')

urlpatterns = [
    path('', include(router.urls)),
]
