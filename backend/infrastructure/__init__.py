"""
Infrastructure Layer - Adapters for the domain ports.
"""
