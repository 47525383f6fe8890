"""
db/ - Database Layer
====================
PostgreSQL connection pool and the kv_store schema used by the
`postgres` storage backend.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
