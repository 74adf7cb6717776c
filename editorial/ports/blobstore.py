from typing import Protocol


class BlobStorePort(Protocol):
    """Object storage for uploaded media. Failures raise OSError."""

    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store bytes under `key` and return the public reference URL."""
        ...

    def delete(self, key: str) -> None:
        """Remove the object stored under `key`."""
        ...
