"""
Use cases.

Each use case receives the repository ports it needs through its
constructor and exposes a single ``execute`` method.
"""
