"""Durable key-value storage adapters.

The throttle keeps its expiration timestamp behind a small string store so
sessions can start with an in-memory backend and move to a shared file (or
another store) without touching the controller.
"""
