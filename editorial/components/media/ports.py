"""Media port definitions."""

from editorial.ports.blobstore import BlobStorePort
from editorial.ports.clock import ClockPort
from editorial.ports.repo import MediaRepoPort, UnitOfWorkPort

__all__ = ["BlobStorePort", "ClockPort", "MediaRepoPort", "UnitOfWorkPort"]
