"""
Shared abstract base models.
"""
import uuid

from django.db import models


class TimestampedModel(models.Model):
    """
    Abstract base model with a UUID primary key and self-updating
    ``created_at`` / ``updated_at`` fields.

    ``updated_at`` doubles as the version stamp clients echo back for
    optimistic concurrency checks.
    """
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-created_at']
