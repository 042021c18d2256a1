"""Chart window navigation."""

from .navigator import NavigationEvent, NavigationHook, Navigator

__all__ = [
    "NavigationEvent",
    "NavigationHook",
    "Navigator",
]
