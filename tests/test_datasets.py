"""
Tests for the dataset store and the upload / presence endpoints.
"""
import io
import os
import re
from datetime import datetime, timezone

import pytest

from mlworkflow.app import app
from mlworkflow.core.exceptions import StorageError
from mlworkflow.repositories.dataset_repo import (
    DatasetStore,
    get_store,
    iso_timestamp,
    stored_name_for,
)

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
STORED_NAME = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
    r"-\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}-\d{3}Z\.csv$"
)


class TestStoredNames:
    """Tests for stored file naming."""

    MOMENT = datetime(2024, 5, 1, 10, 20, 30, 123456, tzinfo=timezone.utc)

    def test_iso_timestamp_has_millisecond_precision(self):
        """Timestamps look like an ISO instant with a Z suffix."""
        assert iso_timestamp(self.MOMENT) == "2024-05-01T10:20:30.123Z"

    def test_stored_name_replaces_colons_and_dots(self):
        """The timestamp part contains no colons or dots."""
        assert stored_name_for("abc", "data.csv", self.MOMENT) == "abc-2024-05-01T10-20-30-123Z.csv"

    def test_stored_name_keeps_last_extension(self):
        assert stored_name_for("abc", "archive.tar.gz", self.MOMENT).endswith("-123Z.gz")

    def test_stored_name_without_extension(self):
        """A name without a dot gets no suffix."""
        assert stored_name_for("abc", "README", self.MOMENT) == "abc-2024-05-01T10-20-30-123Z"

    def test_stored_name_ignores_client_directories(self):
        assert stored_name_for("abc", "../../etc/data.xlsx", self.MOMENT).endswith(".xlsx")
        assert "/" not in stored_name_for("abc", "../../etc/data.xlsx", self.MOMENT)


class TestDatasetStore:
    """Tests for the directory-backed store."""

    def test_count_is_none_when_directory_missing(self, store):
        assert not store.exists()
        assert store.count() is None
        assert store.list() == []

    def test_store_creates_directory(self, store, csv_bytes):
        """The first write creates the directory recursively."""
        rec = store.store(io.BytesIO(csv_bytes), "data.csv", "text/csv")

        assert store.exists()
        assert store.count() == 1
        assert os.path.isfile(rec.path)
        assert os.path.isabs(rec.path)
        assert rec.size == len(csv_bytes)
        assert rec.content_type == "text/csv"
        assert rec.original_name == "data.csv"
        assert STORED_NAME.match(rec.stored_name)
        assert rec.stored_name.startswith(rec.dataset_id)
        with open(rec.path, "rb") as f:
            assert f.read() == csv_bytes

    def test_store_generates_unique_names(self, store, csv_bytes):
        a = store.store(io.BytesIO(csv_bytes), "data.csv")
        b = store.store(io.BytesIO(csv_bytes), "data.csv")

        assert a.dataset_id != b.dataset_id
        assert store.list() == sorted([a.stored_name, b.stored_name])

    def test_count_includes_every_entry(self, store, upload_dir):
        """Any entry in the directory counts, not only uploads."""
        os.makedirs(os.path.join(upload_dir, "nested"))
        with open(os.path.join(upload_dir, ".hidden"), "w") as f:
            f.write("x")

        assert store.count() == 2

    def test_write_failure_raises_storage_error(self, temp_dir, csv_bytes):
        """A regular file where the directory should be makes writes fail."""
        blocker = os.path.join(temp_dir, "blocked")
        with open(blocker, "w") as f:
            f.write("x")
        store = DatasetStore(os.path.join(blocker, "uploads"))

        with pytest.raises(StorageError):
            store.store(io.BytesIO(csv_bytes), "data.csv")


class TestUploadEndpoint:
    """Tests for POST /api/upload."""

    def test_no_files_is_rejected(self, api):
        resp = api.post("/api/upload", data={"name": "nothing"})

        assert resp.status_code == 400
        assert resp.json() == {"error": "No files uploaded"}

    def test_text_only_files_field_is_rejected(self, api, store):
        """A files field carrying only text values counts as no files."""
        resp = api.post("/api/upload", files={"files": (None, "just text")})

        assert resp.status_code == 400
        assert resp.json() == {"error": "No files uploaded"}
        assert store.count() is None

    def test_text_values_next_to_files_are_ignored(self, api, store, csv_bytes):
        resp = api.post(
            "/api/upload",
            data={"files": "a note"},
            files=[("files", ("train.csv", csv_bytes, "text/csv"))],
        )

        assert resp.status_code == 200
        assert resp.json()["message"] == "1 file(s) uploaded successfully"
        assert store.count() == 1

    def test_upload_two_files(self, api, store, csv_bytes):
        resp = api.post("/api/upload", files=[
            ("files", ("train.csv", csv_bytes, "text/csv")),
            ("files", ("extra.xlsx", b"PK\x03\x04", XLSX_TYPE)),
        ])

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "2 file(s) uploaded successfully"
        assert len(body["datasetIds"]) == 2
        assert [f["datasetId"] for f in body["files"]] == body["datasetIds"]

        first, second = body["files"]
        assert first["originalName"] == "train.csv"
        assert first["size"] == len(csv_bytes)
        assert first["type"] == "text/csv"
        assert STORED_NAME.match(first["storedName"])
        assert first["uploadedAt"].endswith("Z")
        assert os.path.isfile(first["path"])
        assert second["storedName"].endswith(".xlsx")
        assert second["type"] == XLSX_TYPE
        assert store.count() == 2

    def test_storage_failure_returns_generic_error(self, temp_dir, csv_bytes):
        """I/O errors are reported without detail."""
        from fastapi.testclient import TestClient

        blocker = os.path.join(temp_dir, "blocked")
        with open(blocker, "w") as f:
            f.write("x")
        app.dependency_overrides[get_store] = lambda: DatasetStore(os.path.join(blocker, "uploads"))
        try:
            resp = TestClient(app).post("/api/upload", files=[
                ("files", ("train.csv", csv_bytes, "text/csv")),
            ])
        finally:
            app.dependency_overrides.clear()

        assert resp.status_code == 500
        assert resp.json() == {"error": "File upload failed"}


class TestPresenceEndpoint:
    """Tests for GET /api/datasets/check."""

    def test_missing_directory(self, api):
        resp = api.get("/api/datasets/check")

        assert resp.status_code == 200
        assert resp.json() == {"hasDatasets": False}

    def test_empty_directory(self, api, upload_dir):
        os.makedirs(upload_dir)

        assert api.get("/api/datasets/check").json() == {"hasDatasets": False, "count": 0}

    def test_presence_after_upload(self, api, upload_dir, csv_bytes):
        """Two uploads flip an empty store to hasDatasets with count 2."""
        os.makedirs(upload_dir)
        assert api.get("/api/datasets/check").json() == {"hasDatasets": False, "count": 0}

        api.post("/api/upload", files=[
            ("files", ("a.csv", csv_bytes, "text/csv")),
            ("files", ("b.csv", csv_bytes, "text/csv")),
        ])

        assert api.get("/api/datasets/check").json() == {"hasDatasets": True, "count": 2}

    def test_listing_failure(self):
        class BrokenStore:
            def count(self):
                raise StorageError("cannot list")

        from fastapi.testclient import TestClient

        app.dependency_overrides[get_store] = lambda: BrokenStore()
        try:
            resp = TestClient(app).get("/api/datasets/check")
        finally:
            app.dependency_overrides.clear()

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to check for datasets"}
