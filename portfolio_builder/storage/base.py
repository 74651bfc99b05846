import json
from abc import ABC, abstractmethod
from typing import Any


class BaseStorageProvider(ABC):
    """Contract for blob storage backends holding generated portfolios."""

    @abstractmethod
    def upload_file(
        self,
        path: str,
        content: bytes | str,
        content_type: str | None = None,
    ) -> str:
        """Store *content* under *path* and return its retrievable URL.

        Raises:
            StorageError: if the backend rejects the write.
        """

    def upload_json(self, path: str, data: Any) -> str:
        """Serialize *data* as indented JSON and store it under *path*."""
        content = json.dumps(data, indent=2, ensure_ascii=False)
        return self.upload_file(path, content, "application/json")

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        """Return the URL under which *path* is served."""

    @abstractmethod
    def delete_file(self, path: str) -> None:
        """Remove the object stored under *path*.

        Raises:
            StorageError: if the object cannot be removed.
        """

    @abstractmethod
    def name(self) -> str:
        """Human-readable backend name, recorded in portfolio metadata."""

    def is_absolute_url(self) -> bool:
        """Whether URLs returned by this backend include scheme and host."""
        return False
