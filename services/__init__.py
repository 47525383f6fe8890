"""
services/ - Business Logic Layer
================================
StorageService turns key-value repositories into async entity storage;
LocationService builds the catalog on top of it.
"""
