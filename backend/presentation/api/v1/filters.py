"""
List filters for the v1 API.

The filtersets only validate query parameters; views hand the cleaned
values to the use cases, which do the filtering in the repositories.
"""

from django_filters import rest_framework as django_filters
from django_filters.utils import translate_validation

from domain.shared.value_objects import ServiceCategory, ServiceOrderStatus
from infrastructure.persistence.models import (
    CustomerModel,
    PartModel,
    ServiceModel,
    ServiceOrderModel,
    VehicleModel,
)

BOOLEAN_CHOICES = (
    ('true', 'true'),
    ('false', 'false'),
    ('1', '1'),
    ('0', '0'),
)


def enum_choices(enum_cls):
    return [(member.value, member.value) for member in enum_cls]


class ActiveFilter(django_filters.TypedChoiceFilter):
    """Strict ``?active=`` filter: anything but true/false/1/0 is a 400."""

    def __init__(self, **kwargs):
        kwargs.setdefault('field_name', 'is_active')
        super().__init__(
            choices=BOOLEAN_CHOICES,
            coerce=lambda value: value in ('true', '1'),
            empty_value=None,
            **kwargs
        )


class CustomerFilterSet(django_filters.FilterSet):
    active = ActiveFilter()

    class Meta:
        model = CustomerModel
        fields = ['active']


class VehicleFilterSet(django_filters.FilterSet):
    active = ActiveFilter()
    customer_id = django_filters.UUIDFilter(field_name='customer_id')

    class Meta:
        model = VehicleModel
        fields = ['active', 'customer_id']


class ServiceFilterSet(django_filters.FilterSet):
    active = ActiveFilter()
    category = django_filters.ChoiceFilter(choices=enum_choices(ServiceCategory))

    class Meta:
        model = ServiceModel
        fields = ['active', 'category']


class PartFilterSet(django_filters.FilterSet):
    active = ActiveFilter()

    class Meta:
        model = PartModel
        fields = ['active']


class ServiceOrderFilterSet(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=enum_choices(ServiceOrderStatus))
    customer_id = django_filters.UUIDFilter(field_name='customer_id')
    vehicle_id = django_filters.UUIDFilter(field_name='vehicle_id')

    class Meta:
        model = ServiceOrderModel
        fields = ['status', 'customer_id', 'vehicle_id']


def clean_filters(filterset_class, query_params):
    """
    Validate ``query_params`` against ``filterset_class``.

    Returns the cleaned values with blanks as ``None``. Raises DRF's
    ``ValidationError`` (rendered as 400) when a parameter is malformed.
    """
    filterset = filterset_class(query_params, queryset=filterset_class._meta.model.objects.none())
    if not filterset.is_valid():
        raise translate_validation(filterset.errors)
    return {
        name: (value if value not in ('', None) else None)
        for name, value in filterset.form.cleaned_data.items()
    }
