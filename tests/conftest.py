"""Shared fixtures: an app instance whose SQLite file lives in a temp directory."""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from iqra import create_app
from iqra.config import settings


@pytest.fixture()
def client(tmp_path, monkeypatch) -> Iterator[TestClient]:
    monkeypatch.setattr(settings, "data_dir", tmp_path / "data")
    with TestClient(create_app()) as test_client:
        yield test_client
