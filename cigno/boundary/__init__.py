"""Boundary adapters: relational database and external custom agent API."""
