"""File-backed and in-memory storage gateways."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from habitpomo_cli.repositories.repository import StorageGateway


class FileStorageGateway(StorageGateway):
    """Stores the blob in a single file, replaced atomically on save."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> bytes | None:
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None

    def save(self, data: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        # Set secure permissions
        self.path.chmod(0o600)


class MemoryStorageGateway(StorageGateway):
    """Keeps the blob in memory; used for tests and throwaway sessions."""

    def __init__(self, data: bytes | None = None):
        self.data = data
        self.save_count = 0

    def load(self) -> bytes | None:
        return self.data

    def save(self, data: bytes) -> None:
        self.data = bytes(data)
        self.save_count += 1
