"""JSON file storage for collections and environments."""

from pathlib import Path
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from apistudio.models.environments import Environment
from apistudio.models.requests import Collection

COLLECTIONS_FILE = "collections.json"
ENVIRONMENTS_FILE = "environments.json"

T = TypeVar("T")


class StorageError(Exception):
    """Raised when a storage file cannot be read or parsed."""

    def __init__(self, path: Path, original_error: Exception | None = None):
        self.path = path
        self.original_error = original_error
        message = f"Cannot read {path}"
        if original_error is not None:
            message += f": {original_error}"
        super().__init__(message)


class StorageRepository:
    """Keyed save/load of collections and environments under a data directory."""

    _collections = TypeAdapter(list[Collection])
    _environments = TypeAdapter(list[Environment])

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir).expanduser()

    def load_collections(self) -> list[Collection]:
        """Load all collections; an absent file means none."""
        return self._load(COLLECTIONS_FILE, self._collections)

    def save_collections(self, collections: list[Collection]) -> None:
        """Replace the stored collections."""
        self._save(COLLECTIONS_FILE, self._collections, collections)

    def load_environments(self) -> list[Environment]:
        """Load all environments; an absent file means none."""
        return self._load(ENVIRONMENTS_FILE, self._environments)

    def save_environments(self, environments: list[Environment]) -> None:
        """Replace the stored environments."""
        self._save(ENVIRONMENTS_FILE, self._environments, environments)

    def _load(self, name: str, adapter: TypeAdapter[list[T]]) -> list[T]:
        path = self.data_dir / name
        if not path.exists():
            return []
        try:
            return adapter.validate_json(path.read_bytes())
        except (OSError, ValidationError) as e:
            raise StorageError(path, e) from e

    def _save(self, name: str, adapter: TypeAdapter[list[T]], items: list[T]) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self.data_dir / name
        path.write_bytes(adapter.dump_json(items, indent=2))
