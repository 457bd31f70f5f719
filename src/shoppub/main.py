"""
Publish Shopify products to sales channels, one product at a time.

Run:
    uv run shoppub
    python -m shoppub.main
"""
from __future__ import annotations

from typing import Optional

import click
import requests

from shoppub.clients.shopify_client import ShopifyClient, ShopifyError
from shoppub.config import ConfigError, ConfigStore, Settings, get_settings
from shoppub.printer import print_publications
from shoppub.prompts import ClickPrompter, Prompter, ask_product_id, ask_publication_gid
from shoppub.utils.logging import get_logger, setup_logging

log = get_logger("shoppub.main")


def publish_loop(client: ShopifyClient, prompter: Prompter) -> None:
    log.info("Looking for all publications...")
    all_publications = client.list_publications()
    print_publications("All publications", all_publications)

    while True:
        product_id = ask_product_id(prompter)
        if not product_id:
            click.echo("Done!")
            return

        log.info("Looking for publications for product %s...", product_id)
        product_publications = client.list_product_publications(product_id)
        print_publications(f"Publications for product {product_id}", product_publications)

        publication_gid = ask_publication_gid(prompter, all_publications)
        if publication_gid is None:
            click.echo("Skipping.")
            continue

        log.info("Publish product %s to %s...", product_id, publication_gid)
        client.publish_product(product_id, publication_gid)


def run(settings: Settings, prompter: Prompter, session: Optional[requests.Session] = None) -> None:
    config = ConfigStore(settings.config_path, prompter).load()
    client = ShopifyClient(
        config,
        api_version=settings.SHOPIFY_API_VERSION,
        timeout=settings.REQUEST_TIMEOUT,
        session=session,
    )
    publish_loop(client, prompter)


def main() -> int:
    s = get_settings()
    setup_logging(level=s.LOG_LEVEL, json_output=(s.LOG_FORMAT == "json"))
    for line in s.summary_lines():
        log.debug(line)

    try:
        run(s, ClickPrompter())
    except click.Abort:
        log.error("Aborted.")
        return 1
    except (ConfigError, ShopifyError, requests.RequestException) as e:
        log.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
