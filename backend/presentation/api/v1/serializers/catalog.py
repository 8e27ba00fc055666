"""
Catalog Serializers.

Request serializers for services, parts and stock adjustments.
"""

from rest_framework import serializers

from application.use_cases.catalog import StockOperation
from domain.catalog.aggregates import DEFAULT_MIN_STOCK_LEVEL, DEFAULT_UNIT
from domain.shared.value_objects import ServiceCategory
from .base import ActorMixin, enum_choice_field


class ServiceCreateSerializer(ActorMixin):
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    estimated_duration = serializers.IntegerField(help_text="Minutes")
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    category = enum_choice_field(ServiceCategory, default=ServiceCategory.OTHER.value)


class PartCreateSerializer(ActorMixin):
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    part_number = serializers.CharField(max_length=50)
    manufacturer = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    stock_quantity = serializers.IntegerField(default=0)
    min_stock_level = serializers.IntegerField(default=DEFAULT_MIN_STOCK_LEVEL)
    unit = serializers.CharField(max_length=10, default=DEFAULT_UNIT)


class StockAdjustSerializer(ActorMixin):
    operation = enum_choice_field(StockOperation)
    quantity = serializers.IntegerField()
