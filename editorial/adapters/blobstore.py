"""Blob store adapters for uploaded media."""

import os
from pathlib import Path


class FileSystemBlobStore:
    """Stores objects as files under base_path, served from public_base_url."""

    def __init__(self, base_path: str, public_base_url: str = "/media"):
        self.base_path = Path(base_path).resolve()
        self.public_base_url = public_base_url.rstrip("/")
        if not self.base_path.exists():
            os.makedirs(self.base_path, exist_ok=True)

    def _safe_path(self, key: str) -> Path:
        # Prevent traversal
        target = (self.base_path / key).resolve()
        if not target.is_relative_to(self.base_path):
            raise PermissionError(f"Path traversal attempt detected: {key}")
        return target

    def url_for(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def put(self, key: str, data: bytes, content_type: str) -> str:
        target = self._safe_path(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as f:
            f.write(data)
        return self.url_for(key)

    def get(self, key: str) -> bytes:
        """Raises FileNotFoundError for unknown keys."""
        target = self._safe_path(key)
        if not target.is_file():
            raise FileNotFoundError(f"File not found: {key}")
        with open(target, "rb") as f:
            return f.read()

    def delete(self, key: str) -> None:
        target = self._safe_path(key)
        if target.exists():
            os.remove(target)


class InMemoryBlobStore:
    """Dict-backed store for tests and ephemeral runs."""

    def __init__(self, public_base_url: str = "/media"):
        self.public_base_url = public_base_url.rstrip("/")
        self.objects: dict[str, tuple[bytes, str]] = {}

    def put(self, key: str, data: bytes, content_type: str) -> str:
        self.objects[key] = (data, content_type)
        return f"{self.public_base_url}/{key}"

    def get(self, key: str) -> bytes:
        if key not in self.objects:
            raise FileNotFoundError(f"File not found: {key}")
        return self.objects[key][0]

    def delete(self, key: str) -> None:
        self.objects.pop(key, None)
