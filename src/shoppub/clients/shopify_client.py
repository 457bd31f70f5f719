from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from shoppub.schemas import (
    ProductPublicationsData,
    Publication,
    PublicationsData,
    PublishablePublishData,
    ShopConfig,
    UserError,
)
from shoppub.utils.logging import get_logger

log = get_logger("shoppub.shopify")

DEFAULT_API_VERSION = "2021-07"

T = TypeVar("T", bound=BaseModel)

LIST_PUBLICATIONS = """
{
  publications(first: 20) {
    edges { node { gid: id, name } }
  }
}
"""

LIST_PRODUCT_PUBLICATIONS = """
query ($productGid: ID!) {
  product(id: $productGid) {
    resourcePublicationsV2(first: 10) {
      edges {
        node {
          publication {
            gid: id
            name
          }
        }
      }
    }
  }
}
"""

PUBLISH_PRODUCT = """
mutation ($productGid: ID!, $publicationGid: ID!, $publishDate: DateTime) {
  publishablePublish(id: $productGid,
    input: { publicationId: $publicationGid, publishDate: $publishDate }) {
    userErrors {
      field
      message
    }
  }
}
"""


class ShopifyError(RuntimeError):
    def __init__(self, message: str, response: Optional[requests.Response] = None, payload: Any = None):
        super().__init__(message)
        self.response = response
        self.status_code = getattr(response, "status_code", None)
        self.payload = payload


class PublishError(ShopifyError):
    def __init__(self, message: str, user_errors: List[UserError]):
        super().__init__(message, payload=[e.model_dump() for e in user_errors])
        self.user_errors = user_errors


def product_gid(product_id: str) -> str:
    return f"gid://shopify/Product/{product_id}"


def utc_now_iso() -> str:
    """Current instant as ISO-8601 with milliseconds, e.g. 2021-07-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ShopifyClient:
    def __init__(
        self,
        config: ShopConfig,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.shop_name = self._normalize_shop_name(config.shop_name)
        self.api_version = api_version or DEFAULT_API_VERSION
        self.timeout = timeout

        self.graphql_url = f"https://{self.shop_name}.myshopify.com/admin/api/{self.api_version}/graphql.json"
        self.session = session or requests.Session()
        self.session.headers.update({
            "X-Shopify-Access-Token": config.access_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": "shoppub/0.1 (+ShopifyClient)"
        })

    @staticmethod
    def _normalize_shop_name(shop_name: str) -> str:
        """
        Accept "my-store", "my-store.myshopify.com" or "https://my-store.myshopify.com/"
        and return "my-store".
        """
        name = shop_name.strip()
        name = name.replace("https://", "").replace("http://", "")
        name = name.rstrip("/")
        if name.endswith(".myshopify.com"):
            name = name[: -len(".myshopify.com")]
        return name

    @staticmethod
    def _raise_http_error(resp: requests.Response) -> None:
        try:
            detail = resp.json()
        except ValueError:
            detail = resp.text
        raise ShopifyError(f"Shopify API error {resp.status_code}: {detail}", response=resp, payload=detail)

    @staticmethod
    def _decode(model: Type[T], data: Dict[str, Any]) -> T:
        try:
            return model.model_validate(data.get("data"))
        except ValidationError as e:
            raise ShopifyError(f"Unexpected Shopify response shape for {model.__name__}: {e}", payload=data) from e

    # ---- Public methods ----

    def graphql_query(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a GraphQL query/mutation against the Shopify Admin API.
        """
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables
        resp = self.session.post(self.graphql_url, json=payload, timeout=self.timeout)
        if not resp.ok:
            self._raise_http_error(resp)
        try:
            data = resp.json()
        except ValueError as e:
            raise ShopifyError(f"Shopify returned a non-JSON body: {resp.text[:200]}", response=resp) from e
        if "errors" in data:
            raise ShopifyError(f"Shopify GraphQL returned errors: {data['errors']}", response=resp, payload=data)
        return data

    def list_publications(self) -> List[Publication]:
        """
        First 20 publications of the shop. Anything past the first page is not fetched.
        """
        data = self.graphql_query(LIST_PUBLICATIONS)
        return self._decode(PublicationsData, data).nodes()

    def list_product_publications(self, product_id: str) -> List[Publication]:
        gid = product_gid(product_id)
        data = self.graphql_query(LIST_PRODUCT_PUBLICATIONS, variables={"productGid": gid})
        decoded = self._decode(ProductPublicationsData, data)
        if decoded.product is None:
            log.warning("Product %s not found", gid)
        return decoded.nodes()

    def publish_product(self, product_id: str, publication_gid: str) -> None:
        variables = {
            "productGid": product_gid(product_id),
            "publicationGid": publication_gid,
            "publishDate": utc_now_iso(),
        }
        data = self.graphql_query(PUBLISH_PRODUCT, variables=variables)
        user_errors = self._decode(PublishablePublishData, data).publishable_publish.user_errors
        if user_errors:
            log.warning("Got errors while publishing: %s", [e.model_dump() for e in user_errors])
            raise PublishError("Unable to publish", user_errors)
