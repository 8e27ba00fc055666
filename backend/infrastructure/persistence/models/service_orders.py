"""
Service Order ORM Models.

1. ServiceOrderModel - Repair jobs
2. ServiceOrderItemModel / PartOrderItemModel - Priced order lines
3. ServiceOrderStatusHistoryModel - Append-only status log
4. OrderNumberSequence - Counter behind OS000001, OS000002, ...
"""

import uuid
from django.db import models

from .base import BaseModel, TimeStampedMixin
from .catalog import PartModel, ServiceModel
from .customers import CustomerModel, VehicleModel


class ServiceOrderStatusChoices(models.TextChoices):
    RECEIVED = 'RECEIVED', 'Received'
    IN_DIAGNOSIS = 'IN_DIAGNOSIS', 'In diagnosis'
    AWAITING_APPROVAL = 'AWAITING_APPROVAL', 'Awaiting approval'
    APPROVED = 'APPROVED', 'Approved'
    IN_PROGRESS = 'IN_PROGRESS', 'In progress'
    AWAITING_PARTS = 'AWAITING_PARTS', 'Awaiting parts'
    COMPLETED = 'COMPLETED', 'Completed'
    DELIVERED = 'DELIVERED', 'Delivered'
    CANCELLED = 'CANCELLED', 'Cancelled'


class PriorityChoices(models.TextChoices):
    LOW = 'LOW', 'Low'
    NORMAL = 'NORMAL', 'Normal'
    HIGH = 'HIGH', 'High'
    URGENT = 'URGENT', 'Urgent'


class LineItemStatusChoices(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    IN_PROGRESS = 'IN_PROGRESS', 'In progress'
    COMPLETED = 'COMPLETED', 'Completed'
    CANCELLED = 'CANCELLED', 'Cancelled'


class OrderNumberSequence(models.Model):
    """Global sequence for ServiceOrder order_number values."""

    key = models.CharField(
        max_length=50,
        primary_key=True,
        verbose_name="Key"
    )
    last_value = models.PositiveBigIntegerField(
        default=0,
        verbose_name="Last value"
    )

    class Meta:
        db_table = 'order_number_sequences'
        verbose_name = 'Order number sequence'
        verbose_name_plural = 'Order number sequences'

    def __str__(self):
        return f"{self.key}: {self.last_value}"


class ServiceOrderModel(BaseModel):
    """A repair job for one vehicle of one customer."""

    order_number = models.CharField(
        max_length=20,
        unique=True,
        verbose_name="Order number"
    )
    customer = models.ForeignKey(
        CustomerModel,
        on_delete=models.PROTECT,
        related_name='service_orders',
        verbose_name="Customer"
    )
    vehicle = models.ForeignKey(
        VehicleModel,
        on_delete=models.PROTECT,
        related_name='service_orders',
        verbose_name="Vehicle"
    )

    status = models.CharField(
        max_length=20,
        choices=ServiceOrderStatusChoices.choices,
        default=ServiceOrderStatusChoices.RECEIVED,
        db_index=True,
        verbose_name="Status"
    )
    priority = models.CharField(
        max_length=10,
        choices=PriorityChoices.choices,
        default=PriorityChoices.NORMAL,
        verbose_name="Priority"
    )

    description = models.TextField(verbose_name="Description")
    diagnosis = models.TextField(null=True, blank=True, verbose_name="Diagnosis")
    observations = models.TextField(null=True, blank=True, verbose_name="Observations")

    # Dates
    estimated_completion = models.DateTimeField(null=True, blank=True, verbose_name="Estimated completion")
    actual_completion = models.DateTimeField(null=True, blank=True, verbose_name="Actual completion")

    # Financials
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=0,
        verbose_name="Total amount"
    )
    approved_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name="Approved amount"
    )
    approved_at = models.DateTimeField(null=True, blank=True, verbose_name="Approved at")
    approved_by = models.CharField(max_length=150, null=True, blank=True, verbose_name="Approved by")

    assigned_to = models.CharField(max_length=150, null=True, blank=True, verbose_name="Assigned to")

    class Meta:
        db_table = 'service_orders'
        verbose_name = 'Service order'
        verbose_name_plural = 'Service orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['customer', 'created_at'], name='service_ord_custome_3f1a2b_idx'),
            models.Index(fields=['vehicle', 'created_at'], name='service_ord_vehicle_8c4d5e_idx'),
        ]

    def __str__(self):
        return f"{self.order_number} [{self.status}]"


class ServiceOrderItemModel(TimeStampedMixin):
    """Service line of an order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    service_order = models.ForeignKey(
        ServiceOrderModel,
        on_delete=models.CASCADE,
        related_name='service_items',
        verbose_name="Service order"
    )
    service = models.ForeignKey(
        ServiceModel,
        on_delete=models.PROTECT,
        related_name='order_items',
        verbose_name="Service"
    )
    quantity = models.PositiveIntegerField(default=1, verbose_name="Quantity")
    unit_price = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="Unit price")
    total_price = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="Total price")
    status = models.CharField(
        max_length=20,
        choices=LineItemStatusChoices.choices,
        default=LineItemStatusChoices.PENDING,
        verbose_name="Status"
    )
    position = models.PositiveIntegerField(default=0, verbose_name="Position")

    class Meta:
        db_table = 'service_order_items'
        verbose_name = 'Service order item'
        verbose_name_plural = 'Service order items'
        ordering = ['position', 'created_at']


class PartOrderItemModel(TimeStampedMixin):
    """Part line of an order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    service_order = models.ForeignKey(
        ServiceOrderModel,
        on_delete=models.CASCADE,
        related_name='part_items',
        verbose_name="Service order"
    )
    part = models.ForeignKey(
        PartModel,
        on_delete=models.PROTECT,
        related_name='order_items',
        verbose_name="Part"
    )
    quantity = models.PositiveIntegerField(default=1, verbose_name="Quantity")
    unit_price = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="Unit price")
    total_price = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="Total price")
    status = models.CharField(
        max_length=20,
        choices=LineItemStatusChoices.choices,
        default=LineItemStatusChoices.PENDING,
        verbose_name="Status"
    )
    position = models.PositiveIntegerField(default=0, verbose_name="Position")

    class Meta:
        db_table = 'part_order_items'
        verbose_name = 'Part order item'
        verbose_name_plural = 'Part order items'
        ordering = ['position', 'created_at']


class ServiceOrderStatusHistoryModel(models.Model):
    """One status transition of an order. Rows are only ever inserted."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    service_order = models.ForeignKey(
        ServiceOrderModel,
        on_delete=models.CASCADE,
        related_name='status_history',
        verbose_name="Service order"
    )
    previous_status = models.CharField(
        max_length=20,
        choices=ServiceOrderStatusChoices.choices,
        null=True,
        blank=True,
        verbose_name="Previous status"
    )
    new_status = models.CharField(
        max_length=20,
        choices=ServiceOrderStatusChoices.choices,
        verbose_name="New status"
    )
    changed_by = models.CharField(max_length=150, null=True, blank=True, verbose_name="Changed by")
    reason = models.TextField(null=True, blank=True, verbose_name="Reason")
    changed_at = models.DateTimeField(db_index=True, verbose_name="Changed at")

    class Meta:
        db_table = 'service_order_status_history'
        verbose_name = 'Status change'
        verbose_name_plural = 'Status history'
        ordering = ['changed_at']

    def __str__(self):
        return f"{self.previous_status} -> {self.new_status}"
