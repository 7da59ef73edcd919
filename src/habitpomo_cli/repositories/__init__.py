"""Repositories for habitpomo-cli.

``StorageGateway`` is the persistence port; ``HabitRepository`` is the
in-memory collection built on top of it. Adapters live in
``habitpomo_cli.adapters``.
"""

from .habit_repository import HabitRepository, LoadResult, load_collection
from .repository import StorageGateway

__all__ = [
    "HabitRepository",
    "LoadResult",
    "StorageGateway",
    "load_collection",
]
