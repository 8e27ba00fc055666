"""
Base Views.

Common view base classes. Views call use cases, never the ORM.
"""

from uuid import UUID

from rest_framework import status, viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from presentation.api.pagination import StandardResultsSetPagination

from ..filters import clean_filters

UUID_PATTERN = '[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}'


class UseCaseViewSet(viewsets.ViewSet):
    """
    Base viewset for endpoints backed by application use cases.

    Responses are rendered from the aggregates' ``to_dict`` snapshots.
    """
    permission_classes = [AllowAny]
    pagination_class = StandardResultsSetPagination
    lookup_value_regex = UUID_PATTERN

    def get_uuid(self, value, name='id'):
        try:
            return UUID(str(value))
        except (TypeError, ValueError):
            raise ValidationError({name: ["Must be a valid UUID."]})

    def filters(self, filterset_class):
        return clean_filters(filterset_class, self.request.query_params)

    def validated(self, serializer_class, partial=False):
        serializer = serializer_class(data=self.request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data

    def page_params(self):
        return self.pagination_class().get_page_params(self.request)

    def paginated(self, page):
        results = [item.to_dict() for item in page.items]
        return self.pagination_class().get_domain_paginated_response(page, results)

    def created(self, aggregate):
        return Response(aggregate.to_dict(), status=status.HTTP_201_CREATED)

    def ok(self, aggregate):
        return Response(aggregate.to_dict())
