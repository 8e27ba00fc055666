"""
Customer ORM Models.

1. CustomerModel - Shop customers (CPF or CNPJ)
2. VehicleModel - Customer vehicles
"""

from django.db import models

from .base import ActiveModel, ActiveManager


class DocumentTypeChoices(models.TextChoices):
    CPF = 'CPF', 'CPF'
    CNPJ = 'CNPJ', 'CNPJ'


class CustomerModel(ActiveModel):
    """A shop customer. The document is stored as digits only."""

    name = models.CharField(
        max_length=200,
        verbose_name="Name"
    )
    document_type = models.CharField(
        max_length=4,
        choices=DocumentTypeChoices.choices,
        verbose_name="Document type"
    )
    document = models.CharField(
        max_length=14,
        unique=True,
        verbose_name="Document"
    )
    email = models.EmailField(
        max_length=254,
        unique=True,
        verbose_name="Email"
    )
    phone = models.CharField(
        max_length=20,
        verbose_name="Phone"
    )

    # Address
    address = models.CharField(max_length=255, null=True, blank=True, verbose_name="Address")
    city = models.CharField(max_length=100, null=True, blank=True, verbose_name="City")
    state = models.CharField(max_length=50, null=True, blank=True, verbose_name="State")
    zip_code = models.CharField(max_length=10, null=True, blank=True, verbose_name="ZIP code")

    objects = models.Manager()
    active = ActiveManager()

    class Meta:
        db_table = 'customers'
        verbose_name = 'Customer'
        verbose_name_plural = 'Customers'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.document})"


class VehicleModel(ActiveModel):
    """A vehicle, identified by its normalized license plate."""

    license_plate = models.CharField(
        max_length=7,
        unique=True,
        verbose_name="License plate"
    )
    brand = models.CharField(max_length=100, verbose_name="Brand")
    model = models.CharField(max_length=100, verbose_name="Model")
    year = models.PositiveIntegerField(verbose_name="Year")
    color = models.CharField(max_length=50, null=True, blank=True, verbose_name="Color")
    chassis_number = models.CharField(max_length=50, null=True, blank=True, verbose_name="Chassis number")

    customer = models.ForeignKey(
        CustomerModel,
        on_delete=models.PROTECT,
        related_name='vehicles',
        verbose_name="Customer"
    )

    objects = models.Manager()
    active = ActiveManager()

    class Meta:
        db_table = 'vehicles'
        verbose_name = 'Vehicle'
        verbose_name_plural = 'Vehicles'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.license_plate} - {self.brand} {self.model}"
