# core/interfaces/sharing_policy.py
from abc import ABC, abstractmethod


class SharingPolicyProvider(ABC):
    """What modules need to know about a user's public sharing flags."""

    @abstractmethod
    def is_publicly_visible(self, db, filament) -> bool: ...

    @abstractmethod
    def public_filaments(self, db, user_id: int) -> list:
        """Filaments of user_id exposed on the public view (empty when nothing is shared)."""
