from staylimit.api.entries import router as entries_router
from staylimit.api.health import router as health_router
from staylimit.api.rules import router as rules_router
from staylimit.api.status import router as status_router

__all__ = [
    "entries_router",
    "health_router",
    "rules_router",
    "status_router",
]
