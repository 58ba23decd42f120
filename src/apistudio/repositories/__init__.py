"""Repository layer for network and storage access."""

from apistudio.repositories.http import HttpExecutor, RequestExecutionError
from apistudio.repositories.storage import StorageError, StorageRepository

__all__ = ["HttpExecutor", "RequestExecutionError", "StorageError", "StorageRepository"]
