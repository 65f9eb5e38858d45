# core/interfaces/filament_query.py
from abc import ABC, abstractmethod
from typing import Any


class FilamentQueryProvider(ABC):
    """What modules need to read from the inventory module."""

    @abstractmethod
    def list_for_user(self, db, user_id: int) -> list: ...

    @abstractmethod
    def is_referenced(self, db, matches: dict[str, Any]) -> bool:
        """True when any filament (of any user) has field == value for one of the given pairs."""
