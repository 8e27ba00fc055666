"""
Persistence - Django ORM models and repository adapters.
"""
