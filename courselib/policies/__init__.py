from .drops import drop_lowest

__all__ = [
    "drop_lowest",
]
