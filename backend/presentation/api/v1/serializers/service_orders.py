"""
Service Order Serializers.

Request serializers for creating and operating on service orders.
"""

from rest_framework import serializers

from domain.shared.value_objects import Priority, ServiceOrderStatus
from .base import ActorMixin, enum_choice_field


class ServiceLineSerializer(serializers.Serializer):
    service_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class PartLineSerializer(serializers.Serializer):
    part_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class ServiceOrderCreateSerializer(serializers.Serializer):
    customer_id = serializers.UUIDField()
    vehicle_id = serializers.UUIDField()
    description = serializers.CharField()
    priority = enum_choice_field(Priority, default=Priority.NORMAL.value)
    services = ServiceLineSerializer(many=True, required=False, default=list)
    parts = PartLineSerializer(many=True, required=False, default=list)
    estimated_completion = serializers.DateTimeField(required=False, allow_null=True)
    created_by = serializers.CharField(max_length=150, required=False, allow_null=True)


class ServiceOrderUpdateSerializer(ActorMixin):
    diagnosis = serializers.CharField(required=False)
    priority = enum_choice_field(Priority, required=False)
    estimated_completion = serializers.DateTimeField(required=False)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)


class StatusUpdateSerializer(serializers.Serializer):
    status = enum_choice_field(ServiceOrderStatus)
    reason = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    changed_by = serializers.CharField(max_length=150, required=False, allow_null=True)


class ApproveSerializer(serializers.Serializer):
    approved_by = serializers.CharField(max_length=150)
    approved_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True
    )


class ObservationSerializer(ActorMixin):
    text = serializers.CharField()


class AssignSerializer(ActorMixin):
    assigned_to = serializers.CharField(max_length=150, allow_null=True)
