"""
commercetools product repository.

Writes a generated description back to a product:
  1. client-credentials token from the auth API
  2. GET the product to learn its current version
  3. POST a setDescription update at that version

No retry on version conflicts: a 409 surfaces as ProductUpdateError.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from ..core.errors import ProductUpdateError

logger = logging.getLogger(__name__)


def _error_detail(response: httpx.Response, *keys: str) -> Optional[str]:
    """First non-empty message field from a commercetools error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    for key in keys or ("message",):
        if body.get(key):
            return str(body[key])
    return None


def _with_detail(text: str, detail: Optional[str]) -> str:
    return f"{text}: {detail}" if detail else text


class ProductStore(ABC):
    """Persists descriptions to the catalog."""

    @abstractmethod
    async def update_description(self, product_id: str, description: str) -> Dict[str, Any]:
        raise NotImplementedError


class ProductRepository(ProductStore):
    """
    Product writes through the commercetools HTTP API.

    The httpx client is owned by the caller (created at startup, closed at
    shutdown). A fresh access token is requested per update.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        project_key: str,
        client_id: str,
        client_secret: str,
        auth_url: str,
        api_url: str,
        scope: str = "",
        locale: str = "en",
    ):
        self.http = http
        self.project_key = project_key
        self.client_id = client_id
        self.client_secret = client_secret
        self.auth_url = auth_url.rstrip("/")
        self.api_url = api_url.rstrip("/")
        self.scope = scope
        self.locale = locale

    def _product_url(self, product_id: str) -> str:
        return f"{self.api_url}/{self.project_key}/products/{product_id}"

    async def _access_token(self) -> str:
        data = {"grant_type": "client_credentials"}
        if self.scope:
            data["scope"] = self.scope

        response = await self.http.post(
            f"{self.auth_url}/oauth/token",
            data=data,
            auth=(self.client_id, self.client_secret),
        )
        if response.status_code != 200:
            detail = _error_detail(response, "error_description", "message")
            raise ProductUpdateError(
                _with_detail(
                    f"commercetools authentication failed ({response.status_code})", detail
                )
            )

        token = response.json().get("access_token")
        if not token:
            raise ProductUpdateError("commercetools authentication returned no access token")
        return token

    async def get_product(self, product_id: str, headers: Dict[str, str]) -> Dict[str, Any]:
        response = await self.http.get(self._product_url(product_id), headers=headers)

        if response.status_code == 404:
            raise ProductUpdateError(f"Product {product_id} not found")
        response.raise_for_status()
        return response.json()

    async def update_description(self, product_id: str, description: str) -> Dict[str, Any]:
        logger.info("Updating product %s description in commercetools", product_id)

        try:
            token = await self._access_token()
            headers = {"Authorization": f"Bearer {token}"}

            product = await self.get_product(product_id, headers)
            version = product.get("version")
            if version is None:
                raise ProductUpdateError(f"Product {product_id} has no version")

            body = {
                "version": version,
                "actions": [
                    {
                        "action": "setDescription",
                        "description": {self.locale: description},
                    }
                ],
            }
            response = await self.http.post(
                self._product_url(product_id), json=body, headers=headers
            )

            if response.status_code == 409:
                raise ProductUpdateError(
                    _with_detail(
                        f"Version conflict updating product {product_id} (version {version})",
                        _error_detail(response),
                    )
                )
            response.raise_for_status()
            updated = response.json()

        except ProductUpdateError:
            raise
        except httpx.HTTPStatusError as e:
            logger.error("commercetools request failed: %s", e)
            raise ProductUpdateError(
                _with_detail(
                    f"commercetools rejected the request ({e.response.status_code})",
                    _error_detail(e.response),
                )
            ) from e
        except httpx.HTTPError as e:
            logger.error("commercetools unreachable: %s", e)
            raise ProductUpdateError(f"commercetools request failed: {e}") from e

        logger.info(
            "Product %s description updated (version %s)", product_id, updated.get("version")
        )
        return updated
