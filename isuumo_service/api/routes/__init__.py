from .chairs import router as chairs_router
from .estates import router as estates_router
from .initialize import router as initialize_router


__all__ = [
    # chairs.py
    "chairs_router",
    # estates.py
    "estates_router",
    # initialize.py
    "initialize_router",
]
