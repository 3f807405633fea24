from . import pairing_router
from . import directory_router

__all__ = [
    "pairing_router",
    "directory_router",
]
