"""
Trip Planner - Root URL Configuration
"""
from django.conf import settings
from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.expenses.urls import trip_urlpatterns as trip_expense_urlpatterns


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    return Response({'status': 'ok', 'service': 'trip-planner-api'})


urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/health/', health_check, name='health-check'),
    path('api/v1/', include('apps.users.urls')),
    path('api/v1/groups/', include('apps.groups.urls')),
    path(
        'api/v1/trips/<uuid:trip_pk>/expenses/',
        include((trip_expense_urlpatterns, 'trip_expenses')),
    ),
    path('api/v1/trips/', include('apps.trips.urls')),
    path('api/v1/expenses/', include('apps.expenses.urls')),
]

# API documentation
if settings.DEBUG:
    from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
    urlpatterns += [
        path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
        path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    ]
