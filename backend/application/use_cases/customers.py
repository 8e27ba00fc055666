"""
Use Cases: Customers

Registration, lookup, update and soft deletion of shop customers.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from application.events import dispatch_events
from domain.customers.aggregates import Customer
from domain.customers.repositories import CustomerRepository
from domain.shared.exceptions import EntityAlreadyExistsException, EntityNotFoundException
from domain.shared.pagination import Page
from domain.shared.value_objects import Document, DocumentType, Email, parse_enum

logger = logging.getLogger(__name__)


@dataclass
class CreateCustomerInput:
    name: str
    document_type: str
    document: str
    email: str
    phone: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    user_id: Optional[str] = None


@dataclass
class UpdateCustomerInput:
    customer_id: UUID
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    user_id: Optional[str] = None


def load_customer(customers: CustomerRepository, customer_id: UUID) -> Customer:
    customer = customers.get_by_id(customer_id)
    if customer is None:
        raise EntityNotFoundException("Customer", customer_id)
    return customer


class CreateCustomerUseCase:
    """
    Register a customer.

    The document and the email are validated first, then checked for
    uniqueness in that order.
    """

    def __init__(self, customers: CustomerRepository):
        self.customers = customers

    def execute(self, data: CreateCustomerInput) -> Customer:
        document_type = parse_enum(DocumentType, data.document_type, "document_type")
        document = Document(data.document, document_type)
        email = Email(data.email)

        if self.customers.get_by_document(document.value) is not None:
            raise EntityAlreadyExistsException("Customer", "document", document.value)
        if self.customers.get_by_email(email.value) is not None:
            raise EntityAlreadyExistsException("Customer", "email", email.value)

        customer = Customer.create(
            name=data.name,
            document_type=document_type,
            document=document.value,
            email=email.value,
            phone=data.phone,
            address=data.address,
            city=data.city,
            state=data.state,
            zip_code=data.zip_code,
            user_id=data.user_id,
        )
        saved = self.customers.add(customer)
        dispatch_events(customer)
        logger.info("Customer %s registered (%s)", saved.id, document_type.value)
        return saved


class GetCustomerUseCase:

    def __init__(self, customers: CustomerRepository):
        self.customers = customers

    def execute(self, customer_id: UUID) -> Customer:
        return load_customer(self.customers, customer_id)


class ListCustomersUseCase:

    def __init__(self, customers: CustomerRepository):
        self.customers = customers

    def execute(
        self,
        active: Optional[bool] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page[Customer]:
        page, limit, _ = Page.bounds(page, limit)
        return self.customers.list(active=active, page=page, limit=limit)


class UpdateCustomerUseCase:
    """Update contact data. A new email must not belong to another customer."""

    def __init__(self, customers: CustomerRepository):
        self.customers = customers

    def execute(self, data: UpdateCustomerInput) -> Customer:
        customer = load_customer(self.customers, data.customer_id)

        if data.email is not None:
            email = Email(data.email)
            owner = self.customers.get_by_email(email.value)
            if owner is not None and owner.id != customer.id:
                raise EntityAlreadyExistsException("Customer", "email", email.value)

        customer.update_info(
            name=data.name,
            email=data.email,
            phone=data.phone,
            address=data.address,
            city=data.city,
            state=data.state,
            zip_code=data.zip_code,
            user_id=data.user_id,
        )
        customer = self.customers.save(customer)
        logger.info("Customer %s updated", customer.id)
        return customer


class DeactivateCustomerUseCase:
    """Soft-delete a customer. Their vehicles and orders are kept."""

    def __init__(self, customers: CustomerRepository):
        self.customers = customers

    def execute(self, customer_id: UUID, user_id: Optional[str] = None) -> Customer:
        customer = load_customer(self.customers, customer_id)
        customer.deactivate(user_id)
        customer = self.customers.save(customer)
        logger.info("Customer %s deactivated", customer.id)
        return customer
