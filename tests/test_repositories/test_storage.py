"""Tests for JSON storage."""

from pathlib import Path

import pytest

from apistudio.models.environments import Environment
from apistudio.models.requests import ApiRequest, Collection
from apistudio.repositories.storage import StorageError, StorageRepository
from apistudio.services.materializer import materialize


class TestStorageRepository:
    """Tests for StorageRepository."""

    def test_missing_files_load_empty(self, tmp_path: Path) -> None:
        """Test an empty data directory has no collections or environments."""
        repo = StorageRepository(tmp_path / "nothing-here")

        assert repo.load_collections() == []
        assert repo.load_environments() == []

    def test_save_creates_directory(self, tmp_path: Path) -> None:
        """Test saving creates the data directory."""
        repo = StorageRepository(tmp_path / "nested" / "dir")
        repo.save_collections([])

        assert (tmp_path / "nested" / "dir" / "collections.json").exists()

    def test_collections_round_trip(self, tmp_path: Path, sample_request: ApiRequest) -> None:
        """Test collections reload identically."""
        collections = [Collection(name="Users API", requests=[sample_request])]
        repo = StorageRepository(tmp_path)
        repo.save_collections(collections)

        assert repo.load_collections() == collections

    def test_environments_round_trip(
        self, tmp_path: Path, environments: list[Environment]
    ) -> None:
        """Test environments reload identically, active flag included."""
        repo = StorageRepository(tmp_path)
        repo.save_environments(environments)

        assert repo.load_environments() == environments

    def test_reloaded_request_materializes_identically(
        self,
        data_dir: Path,
        sample_request: ApiRequest,
        environments: list[Environment],
    ) -> None:
        """Test a stored request materializes the same after a reload."""
        repo = StorageRepository(data_dir)
        reloaded = repo.load_collections()[0].requests[0]
        variables = repo.load_environments()[0].variables

        assert materialize(reloaded, variables) == materialize(
            sample_request, environments[0].variables
        )

    def test_corrupt_file(self, tmp_path: Path) -> None:
        """Test unreadable files raise StorageError."""
        (tmp_path / "environments.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError) as exc_info:
            StorageRepository(tmp_path).load_environments()

        assert "environments.json" in str(exc_info.value)
