"""API routers."""

from .ai import router as ai_router
from .clients import router as clients_router
from .contacts import router as contacts_router
from .deliverables import router as deliverables_router
from .health import router as health_router
from .organisations import router as organisations_router
from .projects import router as projects_router
from .seed import router as seed_router
from .storylines import router as storylines_router
from .users import router as users_router

__all__ = [
    "ai_router",
    "clients_router",
    "contacts_router",
    "deliverables_router",
    "health_router",
    "organisations_router",
    "projects_router",
    "seed_router",
    "storylines_router",
    "users_router",
]
