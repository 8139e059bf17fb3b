from .main_router import Router

__all__: list[str] = [
    "Router",
]
