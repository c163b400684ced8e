from .routes import chairs_router, estates_router, initialize_router


__all__ = [
    "chairs_router",
    "estates_router",
    "initialize_router",
]
