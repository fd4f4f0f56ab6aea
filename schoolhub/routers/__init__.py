# Routers package
from . import schools_router
from . import upload_router
from . import health_router

__all__ = [
    "schools_router",
    "upload_router",
    "health_router",
]
