"""
Base Serializers.

Common serializer mixins and helpers. Serializers here validate request
shape only; business rules live in the domain.
"""

from rest_framework import serializers


def enum_choice_field(enum_cls, **kwargs):
    """ChoiceField accepting the values of a domain enum."""
    return serializers.ChoiceField(choices=[member.value for member in enum_cls], **kwargs)


class ActorMixin(serializers.Serializer):
    """Identifier of the user performing the request."""

    user_id = serializers.CharField(max_length=150, required=False, allow_null=True)
