"""
models/ - Domain Models
=======================
Plain dataclasses passed between services and callers.
"""
