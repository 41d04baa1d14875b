"""
Admin configuration for the Trips app.
"""
from django.contrib import admin

from apps.trips.models import Trip


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    list_display = ['name', 'group', 'status', 'start_date', 'end_date', 'created_by', 'created_at']
    list_filter = ['status', 'start_date', 'created_at']
    search_fields = ['name', 'description', 'destination', 'group__name']
    readonly_fields = ['created_at', 'updated_at']
