"""
Pytest configuration and fixtures
"""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from database import ProjectStore, get_store
from schemas import ContactBundle, Project
from uploads import ImageStorage, get_images


@pytest.fixture
def store(tmp_path):
    """Store backed by a fresh JSON file"""
    s = ProjectStore(tmp_path / "data" / "projects.json")
    s.ensure()
    return s


@pytest.fixture
def images(tmp_path):
    storage = ImageStorage(tmp_path / "uploads", max_bytes=5 * 1024 * 1024)
    storage.ensure()
    return storage


@pytest.fixture
def client(store, images):
    """Test client wired to the temporary store and uploads folder"""
    from main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_images] = lambda: images
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _build_project(project_id="project_1", **overrides) -> Project:
    data = dict(
        id=project_id,
        title="Бассейн под ключ",
        tagline="Каркасный бассейн 6x3",
        description="Монтаж, подогрев, фильтрация",
        city="Москва",
        price=150000,
        contacts=ContactBundle(phone="+7 (916) 123-45-67"),
        created_at=datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc),
    )
    data.update(overrides)
    return Project(**data)


@pytest.fixture
def make_project():
    """Factory for valid project records"""
    return _build_project
