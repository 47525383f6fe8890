"""
utils/ - Shared Helpers
=======================
Logging setup, error types, id and timestamp helpers.
"""
