"""
Custom pagination classes for the API.
"""

from django.conf import settings
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from domain.shared.pagination import Page


class StandardResultsSetPagination(PageNumberPagination):
    """
    Page-number pagination over repository ``Page`` results.

    Allows clients to request different page sizes using ?page_size=N parameter.
    Defaults come from the AUTOSHOP settings.
    """
    page_size = settings.AUTOSHOP['DEFAULT_PAGE_SIZE']
    page_size_query_param = 'page_size'  # Allow client to set page size
    max_page_size = settings.AUTOSHOP['MAX_PAGE_SIZE']

    def get_page_number(self, request, paginator=None):
        try:
            return max(int(request.query_params.get(self.page_query_param, 1)), 1)
        except (TypeError, ValueError):
            return 1

    def get_page_params(self, request):
        """``(page, limit)`` requested by the client."""
        return self.get_page_number(request), self.get_page_size(request)

    def get_domain_paginated_response(self, page: Page, results):
        return Response({
            'count': page.total,
            'page': page.page,
            'page_size': page.limit,
            'pages': page.pages,
            'results': results,
        })
