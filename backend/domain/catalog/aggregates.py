"""
Catalog Domain - Aggregates.

Service (labour the shop sells) and Part (inventory it installs) are the
priced catalog records that service order lines refer to.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from domain.shared.base_aggregate import AggregateRoot
from domain.shared.base_entity import isoformat
from domain.shared.events import PartStockChanged
from domain.shared.exceptions import InsufficientStockException
from domain.shared.guards import (
    require_min_length,
    require_non_negative,
    require_positive,
)
from domain.shared.value_objects import ServiceCategory, parse_enum, to_money


DEFAULT_MIN_STOCK_LEVEL = 5
DEFAULT_UNIT = "un"


@dataclass(eq=False)
class Service(AggregateRoot):
    """
    A catalog service, e.g. an oil change or a wheel alignment.

    ``estimated_duration`` is expressed in minutes.
    """

    name: str = ""
    description: Optional[str] = None
    estimated_duration: int = 0
    price: Decimal = Decimal("0.00")
    category: ServiceCategory = ServiceCategory.OTHER
    is_active: bool = True

    def __post_init__(self):
        self.price = to_money(self.price, "price")
        self.category = parse_enum(ServiceCategory, self.category, "category")
        self._check(self.name, self.estimated_duration, self.price)

    @staticmethod
    def _check(name: str, estimated_duration: int, price: Decimal) -> None:
        require_min_length(name, 3, "name", "Service name")
        require_positive(estimated_duration, "estimated_duration", "Estimated duration")
        require_non_negative(price, "price", "Price")

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def update_info(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        estimated_duration: Optional[int] = None,
        price: Optional[Decimal] = None,
        category: Optional[ServiceCategory] = None,
        user_id: Optional[str] = None,
    ) -> None:
        new_name = self.name if name is None else name
        new_duration = self.estimated_duration if estimated_duration is None else estimated_duration
        new_price = self.price if price is None else to_money(price, "price")
        new_category = self.category if category is None else parse_enum(ServiceCategory, category, "category")
        self._check(new_name, new_duration, new_price)

        self.name = new_name
        self.estimated_duration = new_duration
        self.price = new_price
        self.category = new_category
        if description is not None:
            self.description = description
        self.mark_updated(user_id)

    def update_price(self, new_price: Decimal, user_id: Optional[str] = None) -> None:
        price = to_money(new_price, "price")
        require_non_negative(price, "price", "Price")
        self.price = price
        self.mark_updated(user_id)

    def activate(self, user_id: Optional[str] = None) -> None:
        self.is_active = True
        self.mark_updated(user_id)

    def deactivate(self, user_id: Optional[str] = None) -> None:
        self.is_active = False
        self.mark_updated(user_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "estimated_duration": self.estimated_duration,
            "price": str(self.price),
            "category": self.category.value,
            "is_active": self.is_active,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    @classmethod
    def create(
        cls,
        name: str,
        estimated_duration: int,
        price: Decimal,
        category: ServiceCategory,
        description: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Service:
        return cls(
            name=name,
            description=description,
            estimated_duration=estimated_duration,
            price=price,
            category=category,
            created_by=user_id,
        )


@dataclass(eq=False)
class Part(AggregateRoot):
    """
    An inventory part.

    Invariant: ``stock_quantity`` never goes negative. A part is low on
    stock when its quantity is at or below ``min_stock_level``.
    """

    name: str = ""
    description: Optional[str] = None
    part_number: str = ""
    manufacturer: Optional[str] = None
    price: Decimal = Decimal("0.00")
    stock_quantity: int = 0
    min_stock_level: int = DEFAULT_MIN_STOCK_LEVEL
    unit: str = DEFAULT_UNIT
    is_active: bool = True

    def __post_init__(self):
        self.price = to_money(self.price, "price")
        require_min_length(self.part_number, 2, "part_number", "Part number")
        self._check(self.name, self.price, self.min_stock_level)
        require_non_negative(self.stock_quantity, "stock_quantity", "Stock quantity")

    @staticmethod
    def _check(name: str, price: Decimal, min_stock_level: int) -> None:
        require_min_length(name, 2, "name", "Part name")
        require_non_negative(price, "price", "Price")
        require_non_negative(min_stock_level, "min_stock_level", "Minimum stock level")

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= self.min_stock_level

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock_quantity >= quantity

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def update_info(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        manufacturer: Optional[str] = None,
        price: Optional[Decimal] = None,
        min_stock_level: Optional[int] = None,
        unit: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> None:
        """Update descriptive data. The part number is immutable."""
        new_name = self.name if name is None else name
        new_price = self.price if price is None else to_money(price, "price")
        new_min_stock = self.min_stock_level if min_stock_level is None else min_stock_level
        self._check(new_name, new_price, new_min_stock)

        self.name = new_name
        self.price = new_price
        self.min_stock_level = new_min_stock
        if description is not None:
            self.description = description
        if manufacturer is not None:
            self.manufacturer = manufacturer
        if unit is not None:
            self.unit = unit
        self.mark_updated(user_id)

    def update_price(self, new_price: Decimal, user_id: Optional[str] = None) -> None:
        price = to_money(new_price, "price")
        require_non_negative(price, "price", "Price")
        self.price = price
        self.mark_updated(user_id)

    def add_stock(self, quantity: int, user_id: Optional[str] = None) -> None:
        require_positive(quantity, "quantity", "Quantity")
        self._change_stock(self.stock_quantity + quantity, user_id)

    def remove_stock(self, quantity: int, user_id: Optional[str] = None) -> None:
        require_positive(quantity, "quantity", "Quantity")
        if not self.has_stock_for(quantity):
            raise InsufficientStockException(self.id, quantity, self.stock_quantity, self.name)
        self._change_stock(self.stock_quantity - quantity, user_id)

    def set_stock(self, quantity: int, user_id: Optional[str] = None) -> None:
        require_non_negative(quantity, "stock_quantity", "Stock quantity")
        self._change_stock(quantity, user_id)

    def _change_stock(self, new_quantity: int, user_id: Optional[str]) -> None:
        old_quantity = self.stock_quantity
        self.stock_quantity = new_quantity
        self.mark_updated(user_id)
        self.add_domain_event(PartStockChanged(
            part_id=self.id,
            old_quantity=old_quantity,
            new_quantity=new_quantity,
            low_stock=self.is_low_stock,
        ))

    def activate(self, user_id: Optional[str] = None) -> None:
        self.is_active = True
        self.mark_updated(user_id)

    def deactivate(self, user_id: Optional[str] = None) -> None:
        self.is_active = False
        self.mark_updated(user_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "part_number": self.part_number,
            "manufacturer": self.manufacturer,
            "price": str(self.price),
            "stock_quantity": self.stock_quantity,
            "min_stock_level": self.min_stock_level,
            "unit": self.unit,
            "is_low_stock": self.is_low_stock,
            "is_active": self.is_active,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    @classmethod
    def create(
        cls,
        name: str,
        part_number: str,
        price: Decimal,
        stock_quantity: int = 0,
        min_stock_level: int = DEFAULT_MIN_STOCK_LEVEL,
        unit: str = DEFAULT_UNIT,
        description: Optional[str] = None,
        manufacturer: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Part:
        return cls(
            name=name,
            description=description,
            part_number=part_number.strip() if part_number else part_number,
            manufacturer=manufacturer,
            price=price,
            stock_quantity=stock_quantity,
            min_stock_level=min_stock_level,
            unit=unit,
            created_by=user_id,
        )
