from pathlib import Path

from portfolio_builder.storage.base import BaseStorageProvider
from portfolio_builder.storage.exceptions import StorageError


class LocalStorageAdapter(BaseStorageProvider):
    """Writes portfolio files below a directory served by the API at *base_url*."""

    def __init__(self, base_dir: Path, base_url: str = "/files") -> None:
        self._base_dir = base_dir
        self._base_url = base_url.rstrip("/")

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def upload_file(
        self,
        path: str,
        content: bytes | str,
        content_type: str | None = None,
    ) -> str:
        _ = content_type  # the filesystem keeps no content type
        full_path = self._resolve(path)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                full_path.write_text(content, encoding="utf-8")
            else:
                full_path.write_bytes(content)
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc
        return self.get_public_url(path)

    def get_public_url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def delete_file(self, path: str) -> None:
        full_path = self._resolve(path)
        try:
            full_path.unlink()
        except OSError as exc:
            raise StorageError(f"Failed to delete {path}: {exc}") from exc

    def name(self) -> str:
        return "Local Storage"

    def _resolve(self, path: str) -> Path:
        root = self._base_dir.resolve()
        full_path = (root / path.lstrip("/")).resolve()
        if not full_path.is_relative_to(root):
            raise StorageError(f"Path escapes storage root: {path}")
        return full_path
