"""
Django adapter for the service order repository.

Creation, status changes and full updates each run in one transaction:
- create: order number, lines, opening history row and stock reservation
- update_status: row lock, transition check against the locked state, history row
- update: version compare-and-swap, pending history rows
"""

import logging
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from django.db import transaction
from django.db.models import Avg, Count, DurationField, ExpressionWrapper, F
from django.utils import timezone

from domain.service_orders.aggregates import ServiceOrder
from domain.service_orders.entities import PartLineItem, ServiceLineItem, StatusChange
from domain.service_orders.repositories import ServiceOrderRepository
from domain.shared.exceptions import EntityNotFoundException, InsufficientStockException
from domain.shared.pagination import Page
from domain.shared.value_objects import ServiceOrderStatus
from infrastructure.persistence.models import (
    OrderNumberSequence,
    PartModel,
    PartOrderItemModel,
    ServiceOrderItemModel,
    ServiceOrderModel,
    ServiceOrderStatusHistoryModel,
)

from .base import compare_and_swap, paginate

logger = logging.getLogger(__name__)

ORDER_NUMBER_SEQUENCE_KEY = 'service_order'
ORDER_NUMBER_DIGITS = 6


def order_to_domain(obj: ServiceOrderModel) -> ServiceOrder:
    return ServiceOrder(
        id=obj.id,
        created_at=obj.created_at,
        updated_at=obj.updated_at,
        version=obj.version,
        created_by=obj.created_by,
        updated_by=obj.updated_by,
        order_number=obj.order_number,
        customer_id=obj.customer_id,
        vehicle_id=obj.vehicle_id,
        status=obj.status,
        priority=obj.priority,
        description=obj.description,
        diagnosis=obj.diagnosis,
        observations=obj.observations,
        estimated_completion=obj.estimated_completion,
        actual_completion=obj.actual_completion,
        total_amount=obj.total_amount,
        approved_amount=obj.approved_amount,
        approved_at=obj.approved_at,
        approved_by=obj.approved_by,
        assigned_to=obj.assigned_to,
        service_items=tuple(
            ServiceLineItem(
                id=item.id,
                service_id=item.service_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
                status=item.status,
            )
            for item in obj.service_items.all()
        ),
        part_items=tuple(
            PartLineItem(
                id=item.id,
                part_id=item.part_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
                status=item.status,
            )
            for item in obj.part_items.all()
        ),
        status_history=tuple(
            StatusChange(
                id=row.id,
                previous_status=row.previous_status,
                new_status=row.new_status,
                changed_by=row.changed_by,
                reason=row.reason,
                changed_at=row.changed_at,
            )
            for row in obj.status_history.all()
        ),
    )


def history_row(order_id: UUID, change: StatusChange) -> ServiceOrderStatusHistoryModel:
    return ServiceOrderStatusHistoryModel(
        id=change.id,
        service_order_id=order_id,
        previous_status=change.previous_status.value if change.previous_status else None,
        new_status=change.new_status.value,
        changed_by=change.changed_by,
        reason=change.reason,
        changed_at=change.changed_at,
    )


class DjangoServiceOrderRepository(ServiceOrderRepository):

    def __init__(self, order_number_prefix: str = 'OS'):
        self.order_number_prefix = order_number_prefix

    def _queryset(self):
        return ServiceOrderModel.objects.prefetch_related('service_items', 'part_items', 'status_history')

    def _next_order_number(self) -> str:
        """Next order number. Must run inside a transaction."""
        seq, _ = OrderNumberSequence.objects.select_for_update().get_or_create(
            key=ORDER_NUMBER_SEQUENCE_KEY
        )
        # Never hand out a number that already exists (manual edits, imports).
        latest = (
            ServiceOrderModel.objects
            .filter(order_number__startswith=self.order_number_prefix)
            .order_by('-order_number')
            .values_list('order_number', flat=True)
            .first()
        )
        if latest:
            suffix = latest[len(self.order_number_prefix):]
            if suffix.isdigit() and int(suffix) > seq.last_value:
                seq.last_value = int(suffix)

        seq.last_value += 1
        seq.save(update_fields=['last_value'])
        return f"{self.order_number_prefix}{seq.last_value:0{ORDER_NUMBER_DIGITS}d}"

    def _reserve_stock(self, part_items: Sequence[PartLineItem]) -> None:
        now = timezone.now()
        for item in part_items:
            reserved = PartModel.objects.filter(
                pk=item.part_id,
                stock_quantity__gte=item.quantity,
            ).update(
                stock_quantity=F('stock_quantity') - item.quantity,
                version=F('version') + 1,
                updated_at=now,
            )
            if not reserved:
                part = PartModel.objects.filter(pk=item.part_id).first()
                if part is None:
                    raise EntityNotFoundException("Part", item.part_id)
                raise InsufficientStockException(part.id, item.quantity, part.stock_quantity, part.name)

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def create(
        self,
        order: ServiceOrder,
        service_items: Sequence[ServiceLineItem],
        part_items: Sequence[PartLineItem],
        reserve_stock: bool = False
    ) -> ServiceOrder:
        with transaction.atomic():
            if reserve_stock:
                self._reserve_stock(part_items)

            order_number = self._next_order_number()
            ServiceOrderModel.objects.create(
                id=order.id,
                version=order.version,
                created_by=order.created_by,
                updated_by=order.updated_by,
                order_number=order_number,
                customer_id=order.customer_id,
                vehicle_id=order.vehicle_id,
                status=order.status.value,
                priority=order.priority.value,
                description=order.description,
                diagnosis=order.diagnosis,
                observations=order.observations,
                estimated_completion=order.estimated_completion,
                actual_completion=order.actual_completion,
                total_amount=order.total_amount,
                assigned_to=order.assigned_to,
            )
            ServiceOrderItemModel.objects.bulk_create([
                ServiceOrderItemModel(
                    id=item.id,
                    service_order_id=order.id,
                    service_id=item.service_id,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total_price=item.total_price,
                    status=item.status.value,
                    position=position,
                )
                for position, item in enumerate(service_items)
            ])
            PartOrderItemModel.objects.bulk_create([
                PartOrderItemModel(
                    id=item.id,
                    service_order_id=order.id,
                    part_id=item.part_id,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total_price=item.total_price,
                    status=item.status.value,
                    position=position,
                )
                for position, item in enumerate(part_items)
            ])
            seed = order.seed_history(order.created_by)
            history_row(order.id, seed).save(force_insert=True)
            order.order_number = order_number

        logger.debug("Order %s stored with %s service and %s part lines",
                     order_number, len(service_items), len(part_items))
        return self.get_by_id(order.id)

    def update(self, order: ServiceOrder) -> ServiceOrder:
        with transaction.atomic():
            compare_and_swap(
                ServiceOrderModel, order, "ServiceOrder",
                updated_by=order.updated_by,
                status=order.status.value,
                priority=order.priority.value,
                description=order.description,
                diagnosis=order.diagnosis,
                observations=order.observations,
                estimated_completion=order.estimated_completion,
                actual_completion=order.actual_completion,
                total_amount=order.total_amount,
                approved_amount=order.approved_amount,
                approved_at=order.approved_at,
                approved_by=order.approved_by,
                assigned_to=order.assigned_to,
            )
            stored = set(
                ServiceOrderStatusHistoryModel.objects
                .filter(service_order_id=order.id)
                .values_list('id', flat=True)
            )
            ServiceOrderStatusHistoryModel.objects.bulk_create([
                history_row(order.id, change)
                for change in order.status_history
                if change.id not in stored
            ])
        return self.get_by_id(order.id)

    def update_status(
        self,
        order_id: UUID,
        status: ServiceOrderStatus,
        reason: Optional[str] = None,
        changed_by: Optional[str] = None
    ) -> ServiceOrder:
        with transaction.atomic():
            locked = ServiceOrderModel.objects.select_for_update().filter(pk=order_id).first()
            if locked is None:
                raise EntityNotFoundException("ServiceOrder", order_id)

            order = order_to_domain(locked)
            change = order.update_status(status, changed_by=changed_by, reason=reason)

            ServiceOrderModel.objects.filter(pk=order_id).update(
                status=order.status.value,
                actual_completion=order.actual_completion,
                updated_by=order.updated_by,
                updated_at=order.updated_at,
                version=F('version') + 1,
            )
            history_row(order_id, change).save(force_insert=True)

        return self.get_by_id(order_id)

    def delete(self, order_id: UUID) -> bool:
        deleted, _ = ServiceOrderModel.objects.filter(pk=order_id).delete()
        if deleted:
            logger.warning("Service order %s deleted", order_id)
        return deleted > 0

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_by_id(self, order_id: UUID) -> Optional[ServiceOrder]:
        obj = self._queryset().filter(pk=order_id).first()
        return order_to_domain(obj) if obj else None

    def get_by_order_number(self, order_number: str) -> Optional[ServiceOrder]:
        obj = self._queryset().filter(order_number=order_number).first()
        return order_to_domain(obj) if obj else None

    def list(
        self,
        status: Optional[ServiceOrderStatus] = None,
        customer_id: Optional[UUID] = None,
        vehicle_id: Optional[UUID] = None,
        page: int = 1,
        limit: int = 10
    ) -> Page[ServiceOrder]:
        queryset = self._queryset()
        if status is not None:
            queryset = queryset.filter(status=status.value)
        if customer_id is not None:
            queryset = queryset.filter(customer_id=customer_id)
        if vehicle_id is not None:
            queryset = queryset.filter(vehicle_id=vehicle_id)
        return paginate(queryset, page, limit, order_to_domain)

    def list_by_customer(self, customer_id: UUID) -> List[ServiceOrder]:
        return [order_to_domain(obj) for obj in self._queryset().filter(customer_id=customer_id)]

    def list_by_vehicle(self, vehicle_id: UUID) -> List[ServiceOrder]:
        return [order_to_domain(obj) for obj in self._queryset().filter(vehicle_id=vehicle_id)]

    def list_by_status(self, status: ServiceOrderStatus) -> List[ServiceOrder]:
        return [order_to_domain(obj) for obj in self._queryset().filter(status=status.value)]

    def average_execution_hours(self) -> float:
        average = ServiceOrderModel.objects.filter(
            status__in=[ServiceOrderStatus.COMPLETED.value, ServiceOrderStatus.DELIVERED.value],
            actual_completion__isnull=False,
        ).aggregate(
            duration=Avg(ExpressionWrapper(
                F('actual_completion') - F('created_at'), output_field=DurationField()
            ))
        )['duration']
        if average is None:
            return 0.0
        return average.total_seconds() / 3600

    def count_by_status(self) -> Dict[ServiceOrderStatus, int]:
        rows = ServiceOrderModel.objects.order_by().values('status').annotate(total=Count('id'))
        return {ServiceOrderStatus(row['status']): row['total'] for row in rows}
