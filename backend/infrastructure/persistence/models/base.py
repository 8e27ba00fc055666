"""
Base ORM Models and Mixins.

Provides common functionality for all models:
- UUID primary keys
- Timestamps (created_at, updated_at)
- Version control
- Audit tracking
"""

import uuid
from django.db import models


class TimeStampedMixin(models.Model):
    """Mixin for created_at and updated_at timestamps."""

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created at"
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="Updated at"
    )

    class Meta:
        abstract = True


class VersionedMixin(models.Model):
    """
    Mixin for optimistic locking with version control.

    Repositories bump the version through a conditional UPDATE, never
    through ``save()``.
    """

    version = models.PositiveIntegerField(
        default=1,
        verbose_name="Version"
    )

    class Meta:
        abstract = True


class AuditMixin(models.Model):
    """
    Mixin for tracking who created/modified records.

    Users are opaque identifiers supplied by the caller.
    """

    created_by = models.CharField(
        max_length=150,
        null=True,
        blank=True,
        verbose_name="Created by"
    )
    updated_by = models.CharField(
        max_length=150,
        null=True,
        blank=True,
        verbose_name="Updated by"
    )

    class Meta:
        abstract = True


class BaseModel(TimeStampedMixin, VersionedMixin, AuditMixin):
    """
    Base model with all common functionality.

    Includes:
    - UUID primary key
    - Timestamps (created_at, updated_at)
    - Version control (version)
    - Audit (created_by, updated_by)
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        verbose_name="ID"
    )

    class Meta:
        abstract = True

    def __str__(self):
        return str(self.id)


class ActiveModel(BaseModel):
    """Base model for records that are deactivated instead of deleted."""

    is_active = models.BooleanField(
        default=True,
        db_index=True,
        verbose_name="Active"
    )

    class Meta:
        abstract = True


# =============================================================================
# MANAGER FOR ACTIVE RECORDS
# =============================================================================

class ActiveManager(models.Manager):
    """Manager that only returns active records."""

    def get_queryset(self):
        return super().get_queryset().filter(is_active=True)
