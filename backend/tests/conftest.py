"""
Shared fixtures: Pub/Sub envelope builders and fake collaborators.

No test talks to Vision, OpenAI or commercetools.
"""

from __future__ import annotations

import base64
import json
from typing import Any, Optional
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from describer.pipeline.dependencies import EnrichmentDependencies
from describer.schemas.analysis import ImageAnalysis

PRODUCT_ID = "product-123"
IMAGE_URL = "https://example.com/image.jpg"
DESCRIPTION = "A beautiful cotton shirt."
FLAG = "generateDescription"

ABSENT: Any = object()


def encode_data(payload: Any) -> str:
    raw = payload if isinstance(payload, str) else json.dumps(payload)
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def make_envelope(payload: Any) -> dict:
    """Wrap a product message the way a Pub/Sub push subscription does."""
    return {
        "message": {"data": encode_data(payload), "messageId": "1"},
        "subscription": "projects/demo/subscriptions/product-events",
    }


def make_product_message(
    product_id: Optional[str] = PRODUCT_ID,
    image_url: Optional[str] = IMAGE_URL,
    flag_value: Any = "true",
    flag_name: str = FLAG,
) -> dict:
    attributes = []
    if flag_value is not ABSENT:
        attributes.append({"name": flag_name, "value": flag_value})

    variant: dict = {"attributes": attributes}
    if image_url is not None:
        variant["images"] = [{"url": image_url}]

    projection: dict = {"masterVariant": variant}
    if product_id is not None:
        projection["id"] = product_id

    return {"resource": {"typeId": "product"}, "productProjection": projection}


@pytest.fixture
def analysis() -> ImageAnalysis:
    return ImageAnalysis(
        labels="shirt, cotton",
        objects="Clothing",
        colors=["255, 255, 255"],
        detected_text="Brand Name",
        web_entities="Fashion",
    )


@pytest.fixture
def commerce_update() -> dict:
    return {"id": PRODUCT_ID, "version": 2}


@pytest.fixture
def deps(analysis, commerce_update) -> EnrichmentDependencies:
    """Collaborators that succeed; individual tests override side effects."""
    image_analyzer = AsyncMock()
    image_analyzer.analyze.return_value = analysis

    description_generator = AsyncMock()
    description_generator.generate.return_value = DESCRIPTION

    product_repository = AsyncMock()
    product_repository.update_description.return_value = commerce_update

    return EnrichmentDependencies(
        image_analyzer=image_analyzer,
        description_generator=description_generator,
        product_repository=product_repository,
        flag_attribute=FLAG,
    )


@pytest.fixture
def client(deps, monkeypatch):
    """TestClient with fake collaborators (lifespan is not run)."""
    from main import app
    from describer.api.webhook import get_dependencies
    from describer.pipeline import dependencies

    monkeypatch.setattr(dependencies, "vision_credentials_available", lambda: True)

    app.dependency_overrides[get_dependencies] = lambda: deps
    yield TestClient(app)
    app.dependency_overrides.clear()


def assert_no_collaborator_called(deps: EnrichmentDependencies) -> None:
    deps.image_analyzer.analyze.assert_not_awaited()
    deps.description_generator.generate.assert_not_awaited()
    deps.product_repository.update_description.assert_not_awaited()
