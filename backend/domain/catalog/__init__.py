"""
Catalog Domain - Services and parts offered by the shop.

This domain handles the priced catalog:
- Services (labour, priced per execution, with an estimated duration)
- Parts (inventory, priced per unit, with stock tracking)
"""
