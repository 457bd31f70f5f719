# src/shoppub/schemas.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ShopConfig(BaseModel):
    """
    Credentials for one shop, as stored in config.json.

    JSON keys are camelCase (shopName / accessToken); Python code uses
    snake_case attributes.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    shop_name: str = Field(alias="shopName", min_length=1)
    access_token: str = Field(alias="accessToken", min_length=1, repr=False)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


class Publication(BaseModel):
    model_config = ConfigDict(frozen=True)

    gid: str
    name: str


class UserError(BaseModel):
    field: Optional[List[str]] = None
    message: str


# --- publications(first: 20) ---

class PublicationEdge(BaseModel):
    node: Publication


class PublicationConnection(BaseModel):
    edges: List[PublicationEdge]


class PublicationsData(BaseModel):
    publications: PublicationConnection

    def nodes(self) -> List[Publication]:
        return [e.node for e in self.publications.edges]


# --- product(id:) { resourcePublicationsV2(first: 10) } ---

class ResourcePublication(BaseModel):
    publication: Publication


class ResourcePublicationEdge(BaseModel):
    node: ResourcePublication


class ResourcePublicationConnection(BaseModel):
    edges: List[ResourcePublicationEdge]


class ProductPublications(BaseModel):
    resource_publications: ResourcePublicationConnection = Field(alias="resourcePublicationsV2")


class ProductPublicationsData(BaseModel):
    # null when the product id is unknown to the shop
    product: Optional[ProductPublications]

    def nodes(self) -> List[Publication]:
        if self.product is None:
            return []
        return [e.node.publication for e in self.product.resource_publications.edges]


# --- publishablePublish mutation ---

class PublishablePublishPayload(BaseModel):
    user_errors: List[UserError] = Field(alias="userErrors")


class PublishablePublishData(BaseModel):
    publishable_publish: PublishablePublishPayload = Field(alias="publishablePublish")
