"""Storage adapters implementing ``StorageGateway``."""

from .file_storage import FileStorageGateway, MemoryStorageGateway

__all__ = ["FileStorageGateway", "MemoryStorageGateway"]
