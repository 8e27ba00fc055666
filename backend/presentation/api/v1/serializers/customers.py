"""
Customer Serializers.

Request serializers for customers and vehicles.
"""

from rest_framework import serializers

from domain.shared.value_objects import DocumentType
from .base import ActorMixin, enum_choice_field


class CustomerCreateSerializer(ActorMixin):
    name = serializers.CharField(max_length=200)
    document_type = enum_choice_field(DocumentType)
    document = serializers.CharField(max_length=32)
    email = serializers.CharField(max_length=254)
    phone = serializers.CharField(max_length=20)
    address = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    state = serializers.CharField(max_length=50, required=False, allow_null=True, allow_blank=True)
    zip_code = serializers.CharField(max_length=10, required=False, allow_null=True, allow_blank=True)


class CustomerUpdateSerializer(ActorMixin):
    name = serializers.CharField(max_length=200, required=False)
    email = serializers.CharField(max_length=254, required=False)
    phone = serializers.CharField(max_length=20, required=False)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    state = serializers.CharField(max_length=50, required=False, allow_blank=True)
    zip_code = serializers.CharField(max_length=10, required=False, allow_blank=True)


class VehicleCreateSerializer(ActorMixin):
    customer_id = serializers.UUIDField()
    license_plate = serializers.CharField(max_length=10)
    brand = serializers.CharField(max_length=100)
    model = serializers.CharField(max_length=100)
    year = serializers.IntegerField()
    color = serializers.CharField(max_length=50, required=False, allow_null=True, allow_blank=True)
    chassis_number = serializers.CharField(max_length=50, required=False, allow_null=True, allow_blank=True)
