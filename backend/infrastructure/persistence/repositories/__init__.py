"""
Repository adapters implementing the domain ports with the Django ORM.
"""

from .catalog import DjangoPartRepository, DjangoServiceRepository
from .customers import DjangoCustomerRepository, DjangoVehicleRepository
from .service_orders import DjangoServiceOrderRepository

__all__ = [
    'DjangoCustomerRepository',
    'DjangoVehicleRepository',
    'DjangoServiceRepository',
    'DjangoPartRepository',
    'DjangoServiceOrderRepository',
]
