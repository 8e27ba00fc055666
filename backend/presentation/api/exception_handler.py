"""
API exception handler.

Maps domain error codes to HTTP status codes in one place. Every error body
has the shape ``{"detail", "error", "details"}``.
"""

import logging

from django.db import IntegrityError
from django.db.models.deletion import ProtectedError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from domain.shared.exceptions import DomainException, ValidationException

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    'ENTITY_NOT_FOUND': status.HTTP_404_NOT_FOUND,
    'ENTITY_ALREADY_EXISTS': status.HTTP_409_CONFLICT,
    'CONCURRENCY_ERROR': status.HTTP_409_CONFLICT,
    'INVALID_STATUS_TRANSITION': status.HTTP_422_UNPROCESSABLE_ENTITY,
    'ILLEGAL_APPROVAL': status.HTTP_422_UNPROCESSABLE_ENTITY,
    'ENTITY_INACTIVE': status.HTTP_422_UNPROCESSABLE_ENTITY,
    'VEHICLE_CUSTOMER_MISMATCH': status.HTTP_422_UNPROCESSABLE_ENTITY,
    'INSUFFICIENT_STOCK': status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def status_for(exc: DomainException) -> int:
    if isinstance(exc, ValidationException):
        return status.HTTP_400_BAD_REQUEST
    return STATUS_BY_CODE.get(exc.code, status.HTTP_422_UNPROCESSABLE_ENTITY)


def custom_exception_handler(exc, context):
    """
    Render domain and integrity errors; defer everything else to DRF.
    """
    if isinstance(exc, DomainException):
        http_status = status_for(exc)
        view = context.get('view')
        logger.warning(
            "%s rejected in %s: %s",
            exc.code, view.__class__.__name__ if view else 'unknown view', exc.message
        )
        return Response(
            {
                'detail': exc.message,
                'error': exc.code,
                'details': exc.details,
            },
            status=http_status,
        )

    if isinstance(exc, ProtectedError):
        return Response(
            {
                'detail': 'Record is referenced by other records and cannot be deleted.',
                'error': 'PROTECTED_ERROR',
                'details': {},
            },
            status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, IntegrityError):
        logger.warning("Integrity error: %s", exc)
        return Response(
            {
                'detail': 'Data integrity violation.',
                'error': 'INTEGRITY_ERROR',
                'details': {},
            },
            status=status.HTTP_409_CONFLICT,
        )

    response = exception_handler(exc, context)

    if response is not None and isinstance(response.data, dict) and 'detail' not in response.data:
        # Serializer errors: keep field messages under "details".
        response.data = {
            'detail': 'Invalid request.',
            'error': 'VALIDATION_ERROR',
            'details': response.data,
        }
    elif response is None:
        logger.error("Unhandled error in API view", exc_info=exc)

    return response
