"""
Models for the Trips app.
"""
from django.conf import settings
from django.db import models

from common.models import TimestampedModel


class Trip(TimestampedModel):
    """
    A trip planned within a group. Expenses are recorded against trips.
    """
    class Status(models.TextChoices):
        PLANNING = 'PLANNING', 'Planning'
        CONFIRMED = 'CONFIRMED', 'Confirmed'
        IN_PROGRESS = 'IN_PROGRESS', 'In Progress'
        COMPLETED = 'COMPLETED', 'Completed'
        CANCELLED = 'CANCELLED', 'Cancelled'

    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.CASCADE,
        related_name='trips',
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    destination = models.CharField(max_length=255, blank=True, default='')
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PLANNING,
        db_index=True,
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='created_trips',
    )

    class Meta:
        db_table = 'trips'
        ordering = ['-start_date', '-created_at']

    def __str__(self):
        return f'{self.name} ({self.group.name})'

    def clean(self):
        from django.core.exceptions import ValidationError
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError('End date must be after start date.')
