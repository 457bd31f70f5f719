# src/shoppub/prompts.py
"""
Interactive prompts.

The driver loop only talks to a ``Prompter``; ``ClickPrompter`` is the
terminal implementation. Every prompt method returns ``None`` when the
operator cancels (Ctrl-C / Ctrl-D).
"""
from __future__ import annotations

from typing import Any, List, NamedTuple, Optional, Protocol, Sequence

import click

from shoppub.schemas import Publication, ShopConfig


class Choice(NamedTuple):
    title: str
    value: Any


class Prompter(Protocol):
    def prompt_text(self, message: str) -> Optional[str]: ...

    def prompt_secret(self, message: str) -> Optional[str]: ...

    def prompt_select(self, message: str, choices: Sequence[Choice]) -> Optional[Any]: ...


class ClickPrompter:
    def prompt_text(self, message: str) -> Optional[str]:
        try:
            return click.prompt(message, default="", show_default=False)
        except click.Abort:
            return None

    def prompt_secret(self, message: str) -> Optional[str]:
        try:
            return click.prompt(message, default="", show_default=False, hide_input=True)
        except click.Abort:
            return None

    def prompt_select(self, message: str, choices: Sequence[Choice]) -> Optional[Any]:
        if not choices:
            return None
        click.echo(message)
        for idx, choice in enumerate(choices):
            click.echo(f"  {idx}) {choice.title}")
        try:
            picked = click.prompt("Number", type=click.IntRange(0, len(choices) - 1), default=0)
        except click.Abort:
            return None
        return choices[picked].value


# Value of the "Skip" entry in the publication menu
SKIP = ""


def ask_config(prompter: Prompter) -> ShopConfig:
    shop_name = (prompter.prompt_text("Enter shop name (<shopname>.myshopify.com):") or "").strip()
    if not shop_name:
        raise click.Abort()
    access_token = (prompter.prompt_secret("Enter access token / private api key:") or "").strip()
    if not access_token:
        raise click.Abort()
    return ShopConfig(shop_name=shop_name, access_token=access_token)


def ask_product_id(prompter: Prompter) -> Optional[str]:
    product_id = prompter.prompt_text("Enter product id")
    if product_id is None:
        return None
    return product_id.strip()


def ask_publication_gid(prompter: Prompter, publications: List[Publication]) -> Optional[str]:
    choices = [Choice("Skip", SKIP)]
    choices.extend(Choice(p.name, p.gid) for p in publications)

    gid = prompter.prompt_select("Choose where to publish", choices)
    if gid is None or gid == SKIP:
        return None
    return gid
