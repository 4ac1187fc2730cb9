"""
Deliverables router package.

Exports the router for deliverable management endpoints.
"""

from .deliverables_router import router

__all__ = ["router"]
