"""
Catalog ORM Models.

1. ServiceModel - Services offered by the shop
2. PartModel - Inventory parts with stock
"""

from django.db import models
from django.db.models import F

from .base import ActiveModel, ActiveManager


class ServiceCategoryChoices(models.TextChoices):
    MAINTENANCE = 'MAINTENANCE', 'Maintenance'
    REPAIR = 'REPAIR', 'Repair'
    INSPECTION = 'INSPECTION', 'Inspection'
    DIAGNOSTICS = 'DIAGNOSTICS', 'Diagnostics'
    ALIGNMENT = 'ALIGNMENT', 'Alignment'
    BALANCING = 'BALANCING', 'Balancing'
    ELECTRICAL = 'ELECTRICAL', 'Electrical'
    BODYWORK = 'BODYWORK', 'Bodywork'
    PAINTING = 'PAINTING', 'Painting'
    OTHER = 'OTHER', 'Other'


class ServiceModel(ActiveModel):
    """A catalog service."""

    name = models.CharField(max_length=200, verbose_name="Name")
    description = models.TextField(null=True, blank=True, verbose_name="Description")
    estimated_duration = models.PositiveIntegerField(
        verbose_name="Estimated duration (minutes)"
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        verbose_name="Price"
    )
    category = models.CharField(
        max_length=20,
        choices=ServiceCategoryChoices.choices,
        default=ServiceCategoryChoices.OTHER,
        db_index=True,
        verbose_name="Category"
    )

    objects = models.Manager()
    active = ActiveManager()

    class Meta:
        db_table = 'services'
        verbose_name = 'Service'
        verbose_name_plural = 'Services'
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class PartQuerySet(models.QuerySet):

    def low_stock(self):
        """Parts at or below their minimum stock level."""
        return self.filter(stock_quantity__lte=F('min_stock_level'))


class PartModel(ActiveModel):
    """An inventory part. Stock never goes below zero."""

    name = models.CharField(max_length=200, verbose_name="Name")
    description = models.TextField(null=True, blank=True, verbose_name="Description")
    part_number = models.CharField(
        max_length=50,
        unique=True,
        verbose_name="Part number"
    )
    manufacturer = models.CharField(max_length=100, null=True, blank=True, verbose_name="Manufacturer")
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        verbose_name="Price"
    )
    stock_quantity = models.PositiveIntegerField(default=0, verbose_name="Stock quantity")
    min_stock_level = models.PositiveIntegerField(default=5, verbose_name="Minimum stock level")
    unit = models.CharField(max_length=10, default='un', verbose_name="Unit")

    objects = PartQuerySet.as_manager()
    active = ActiveManager.from_queryset(PartQuerySet)()

    class Meta:
        db_table = 'parts'
        verbose_name = 'Part'
        verbose_name_plural = 'Parts'
        ordering = ['-created_at']

    def __str__(self):
        return f"[{self.part_number}] {self.name}"
