"""Storage port for habitpomo-cli.

The habit collection is persisted as a single opaque blob. Adapters in
``habitpomo_cli.adapters`` decide where the bytes live; the repository
layer only knows this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class StorageGateway(ABC):
    """Durable byte storage for one key."""

    @abstractmethod
    def load(self) -> bytes | None:
        """Return the stored blob, or None if nothing has been saved yet.

        Raises:
            OSError: If the blob exists but cannot be read
        """
        raise NotImplementedError("StorageGateway.load() must be implemented by adapter")

    @abstractmethod
    def save(self, data: bytes) -> None:
        """Replace the stored blob with *data* in one step.

        Raises:
            OSError: If the blob cannot be written
        """
        raise NotImplementedError("StorageGateway.save() must be implemented by adapter")
