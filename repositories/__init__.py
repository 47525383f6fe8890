"""
repositories/ - Data Access Layer
==================================
Key-value backends. Each repository loads and saves a whole collection
(a list of plain dicts) under a single key; services turn those dicts into
domain model objects.
"""
