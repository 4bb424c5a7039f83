"""Shared test fixtures for sitecontent."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from sitecontent import create_app
from sitecontent.domain.content import ContentSnapshot
from sitecontent.domain.defaults import DEFAULT_CONTENT, default_content
from sitecontent.extensions import db
from sitecontent.normalizers.content import parse_content


class FakeStore:
    """In-memory content store recording every call."""

    def __init__(self, stored: ContentSnapshot | None = None) -> None:
        self.stored = stored
        self.saved: list[ContentSnapshot] = []
        self.loads = 0
        self.save_result = True
        self.save_error: Exception | None = None
        self.load_error: Exception | None = None

    async def save(self, snapshot: ContentSnapshot) -> bool:
        self.saved.append(snapshot)
        if self.save_error is not None:
            raise self.save_error
        if self.save_result:
            self.stored = snapshot
        return self.save_result

    async def load(self) -> ContentSnapshot | None:
        self.loads += 1
        if self.load_error is not None:
            raise self.load_error
        return self.stored


def make_user_content_dict() -> dict[str, Any]:
    """The baseline after a real user went through the editor."""
    data = copy.deepcopy(DEFAULT_CONTENT)
    for block in data["blocks"]:
        if block["id"] == "hero":
            block["title"] = "Корекція пробігу у Львові"
        elif block["id"] == "can-module":
            block["price"] = "2700"
        elif block["id"] == "analog-module":
            block["price"] = "1900"
        elif block["id"] == "ops-module":
            block["price"] = "3500"

    # Inserted by the editor before the videos block, order not yet fixed
    data["blocks"].insert(6, {
        "id": "custom-abs",
        "type": "custom",
        "title": "ABS Block",
        "body": "Ремонт блоків ABS",
        "order": 99,
    })
    return data


@pytest.fixture
def baseline() -> ContentSnapshot:
    return default_content()


@pytest.fixture
def user_content() -> ContentSnapshot:
    return parse_content(make_user_content_dict())


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()
