"""
Domain Layer - Core business logic.

Pure Python: no framework imports, no I/O.
"""
