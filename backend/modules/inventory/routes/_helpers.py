"""Shared helpers for inventory routes."""

from core.registry import registry


def is_publicly_shared(db, filament) -> bool:
    """Whether the owner's sharing flags expose this filament on the public view."""
    provider = registry.get_provider("SharingPolicyProvider")
    if provider is None:
        return False
    return provider.is_publicly_visible(db, filament)
