# src/shoppub/config.py
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from shoppub.prompts import Prompter, ask_config
from shoppub.schemas import ShopConfig
from shoppub.utils.logging import get_logger

log = get_logger("shoppub.config")

# config.json sits in the project root, next to pyproject.toml
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config.json"


class ConfigError(ValueError):
    pass


class Settings(BaseSettings):
    """
    Process settings (Pydantic v2). Shop credentials are NOT here; they live
    in the config file managed by ConfigStore.
    Load order:
      1) Environment variables
      2) .env file (if present)
    """

    # --- App ---
    ENV: Literal["dev", "test", "prod"] = Field(default="dev", description="Environment profile")
    LOG_LEVEL: str = Field(default="INFO", description="Python logging level (DEBUG, INFO, WARNING, ERROR)")
    LOG_FORMAT: Literal["text", "json"] = Field(default="text", description="Log format for output")

    # --- Shopify ---
    SHOPIFY_API_VERSION: str = Field(default="2021-07", description="Shopify Admin API version to use")
    REQUEST_TIMEOUT: Optional[float] = Field(default=None, description="HTTP timeout in seconds (unset = wait forever)")

    # --- Credentials cache ---
    CONFIG_PATH: Optional[Path] = Field(default=None, description="Where shop credentials are stored")

    class Config:
        case_sensitive = False

    @field_validator("REQUEST_TIMEOUT", mode="before")
    @classmethod
    def _blank_timeout(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def config_path(self) -> Path:
        return Path(self.CONFIG_PATH) if self.CONFIG_PATH else DEFAULT_CONFIG_PATH

    def summary_lines(self) -> list[str]:
        return [
            f"ENV={self.ENV}",
            f"LOG_LEVEL={self.LOG_LEVEL} LOG_FORMAT={self.LOG_FORMAT}",
            f"Shopify: api_version={self.SHOPIFY_API_VERSION}, timeout={self.REQUEST_TIMEOUT or 'none'}",
            f"Config file: {self.config_path}",
        ]


@lru_cache()
def get_settings() -> Settings:
    if os.path.exists(".env"):
        load_dotenv(".env", override=False)
    if os.path.exists("../.env"):
        load_dotenv("../.env", override=False)

    return Settings()


class ConfigStore:
    """
    Read-or-create cache for shop credentials.

    First run asks the operator for shop name and access token and writes
    them to ``path``; later runs just read the file back.
    """

    def __init__(self, path: Path, prompter: Prompter):
        self.path = Path(path)
        self.prompter = prompter

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> ShopConfig:
        if self.exists():
            log.info("Using config from %s...", self.path)
            return self._read()

        config = ask_config(self.prompter)

        log.info("Writing config to %s.", self.path)
        self._write(config)
        return config

    def _read(self) -> ShopConfig:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Unable to read config file {self.path}: {e}") from e
        try:
            return ShopConfig.model_validate_json(raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid config file {self.path}: {e}") from e

    def _write(self, config: ShopConfig) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(config.to_json() + "\n", encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Unable to write config file {self.path}: {e}") from e
