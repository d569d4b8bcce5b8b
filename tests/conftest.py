from __future__ import annotations

import os
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from skill_exchange.config import Settings
from skill_exchange.database import Database
from skill_exchange.models.skill import Skill


def pytest_configure() -> None:
    # Ensure a local .env cannot leak into the test run.
    os.environ["ENVIRONMENT"] = "test"


def skill_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "Beginner Guitar Lessons",
        "description": "Chords, strumming and first songs.",
        "category": "Music",
        "skillType": "Offering",
        "instructorName": "Sam Rivera",
        "contactEmail": "sam@example.com",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        db_url=f"sqlite:///{tmp_path / 'test.db'}",
        environment="test",
        log_level="WARNING",
    )


@pytest.fixture()
def client(settings: Settings) -> Any:
    from skill_exchange.main import create_app

    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def create_skill(client) -> Callable[..., dict[str, Any]]:
    def _create(**overrides: Any) -> dict[str, Any]:
        r = client.post("/api/skills", json=skill_payload(**overrides))
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _create


@pytest.fixture()
def add_review(client) -> Callable[..., dict[str, Any]]:
    def _add(skill_id: int, rating: int, **overrides: Any) -> dict[str, Any]:
        body = {"skillId": skill_id, "reviewerName": "Alex", "rating": rating, "comment": "Great session."}
        body.update(overrides)
        r = client.post("/api/reviews", json=body)
        assert r.status_code == 201, r.text
        return r.json()

    return _add


@pytest.fixture()
def database(settings: Settings) -> Any:
    db = Database(settings.db_url)
    db.create_all()
    try:
        yield db
    finally:
        db.dispose()


@pytest.fixture()
def db(database: Database) -> Any:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_skill(db) -> Callable[..., Skill]:
    def _make(**overrides: Any) -> Skill:
        values: dict[str, Any] = {
            "title": "Skill",
            "description": "A skill worth sharing.",
            "category": "Other",
            "skill_type": "Offering",
            "instructor_name": "Robin",
            "contact_email": "robin@example.com",
        }
        values.update(overrides)
        skill = Skill(**values)
        db.add(skill)
        db.commit()
        db.refresh(skill)
        return skill

    return _make
