"""
Shared helpers for the Django repository adapters.
"""

from typing import Callable, Type, TypeVar

from django.db import models
from django.db.models import F

from domain.shared.base_entity import VersionedEntity
from domain.shared.exceptions import ConcurrencyException, EntityNotFoundException
from domain.shared.pagination import Page

T = TypeVar("T")


def paginate(
    queryset: models.QuerySet,
    page: int,
    limit: int,
    to_domain: Callable[[models.Model], T],
) -> Page[T]:
    page, limit, offset = Page.bounds(page, limit)
    total = queryset.count()
    items = [to_domain(obj) for obj in queryset[offset:offset + limit]]
    return Page(items=items, total=total, page=page, limit=limit)


def compare_and_swap(
    model_cls: Type[models.Model],
    entity: VersionedEntity,
    entity_type: str,
    **fields,
) -> None:
    """
    Write ``fields`` only if the stored row is still at ``entity.version``.

    On success the row's version is bumped and so is the entity's.
    """
    updated = model_cls.objects.filter(pk=entity.id, version=entity.version).update(
        version=F('version') + 1,
        updated_at=entity.updated_at,
        **fields,
    )
    if not updated:
        if model_cls.objects.filter(pk=entity.id).exists():
            raise ConcurrencyException(entity_type, entity.id, entity.version)
        raise EntityNotFoundException(entity_type, entity.id)
    entity.increment_version()
