from .base import DataSource
from .snapshot import SnapshotDataSource
from .remote import RemoteDataSource

__all__ = [
    "DataSource",
    "SnapshotDataSource",
    "RemoteDataSource",
]
