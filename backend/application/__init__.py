"""
Application Layer - Use cases orchestrating the domain against repository ports.
"""
