#!/usr/bin/env python3
"""
GraphQL sanity test for Shopify Admin API.

Lists the shop's publications using the saved credentials (config.json)
without entering the interactive publish loop.

Usage:
    uv run scripts/check_shopify_publications.py
    uv run scripts/check_shopify_publications.py --raw
"""
from __future__ import annotations

import argparse
import json
import sys

from shoppub.clients.shopify_client import LIST_PUBLICATIONS, ShopifyClient
from shoppub.config import ConfigStore, get_settings
from shoppub.printer import print_publications
from shoppub.prompts import ClickPrompter
from shoppub.utils.logging import setup_logging, get_logger


def main() -> None:
    parser = argparse.ArgumentParser(description="List Shopify publications via GraphQL Admin API.")
    parser.add_argument("--raw", action="store_true", help="Print raw GraphQL JSON response")
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(level=settings.LOG_LEVEL, json_output=(settings.LOG_FORMAT == "json"))
    log = get_logger("shoppub.shopify.check")

    store = ConfigStore(settings.config_path, ClickPrompter())
    if not store.exists():
        print(f"No config at {store.path}. Run `shoppub` once to create it.")
        sys.exit(1)

    client = ShopifyClient(store.load(), api_version=settings.SHOPIFY_API_VERSION, timeout=settings.REQUEST_TIMEOUT)
    log.info("GraphQL endpoint: %s", client.graphql_url)

    if args.raw:
        print(json.dumps(client.graphql_query(LIST_PUBLICATIONS), indent=2, ensure_ascii=False))
        return

    publications = client.list_publications()
    log.info("Shopify returned %d publications via GraphQL", len(publications))
    print_publications("All publications", publications)


if __name__ == "__main__":
    main()
