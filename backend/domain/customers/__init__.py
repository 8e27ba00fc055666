"""
Customers Domain - Customers and their vehicles.

This domain handles the shop's clientele:
- Customers identified by a CPF or CNPJ tax document
- Vehicles identified by a Brazilian license plate, owned by one customer
"""
