"""
Shared fixtures: a scripted Prompter and a fake requests.Session.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from shoppub.clients.shopify_client import ShopifyClient
from shoppub.schemas import ShopConfig


class ScriptedPrompter:
    """Prompter double: answers come from queues, calls are recorded."""

    def __init__(self, texts=None, secrets=None, selects=None):
        self.texts: List[Optional[str]] = list(texts or [])
        self.secrets: List[Optional[str]] = list(secrets or [])
        self.selects: List[Any] = list(selects or [])
        self.calls: List[tuple] = []

    def prompt_text(self, message):
        self.calls.append(("text", message))
        assert self.texts, f"unexpected text prompt: {message}"
        return self.texts.pop(0)

    def prompt_secret(self, message):
        self.calls.append(("secret", message))
        assert self.secrets, f"unexpected secret prompt: {message}"
        return self.secrets.pop(0)

    def prompt_select(self, message, choices):
        self.calls.append(("select", message, list(choices)))
        assert self.selects, f"unexpected select prompt: {message}"
        return self.selects.pop(0)


def make_response(payload: Any = None, status_code: int = 200, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.text = text
    if payload is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = payload
    return resp


def make_session(*payloads: Dict[str, Any]) -> MagicMock:
    """Session whose successive POSTs return the given GraphQL bodies."""
    session = MagicMock()
    session.headers = {}
    session.post.side_effect = [make_response(p) for p in payloads]
    return session


def publications_payload(*pubs: tuple) -> Dict[str, Any]:
    return {"data": {"publications": {"edges": [{"node": {"gid": gid, "name": name}} for gid, name in pubs]}}}


def product_publications_payload(*pubs: tuple) -> Dict[str, Any]:
    edges = [{"node": {"publication": {"gid": gid, "name": name}}} for gid, name in pubs]
    return {"data": {"product": {"resourcePublicationsV2": {"edges": edges}}}}


def publish_payload(*messages: str) -> Dict[str, Any]:
    errors = [{"field": None, "message": m} for m in messages]
    return {"data": {"publishablePublish": {"userErrors": errors}}}


@pytest.fixture
def shop_config() -> ShopConfig:
    return ShopConfig(shop_name="acme", access_token="tok")


@pytest.fixture
def make_client(shop_config):
    def _make(*payloads, **kwargs) -> ShopifyClient:
        return ShopifyClient(shop_config, session=make_session(*payloads), **kwargs)
    return _make
