# src/mtgox/settings.py
from __future__ import annotations
from decimal import Decimal
import os
from typing import Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mtgox.version import __version__


class ApiCfg(BaseModel):
    key: str | None = None
    secret: str | None = None


class ExchangeCfg(BaseModel):
    name: str = "mtgox"
    base_url: str = "https://mtgox.com"
    timeout_s: int = 10
    verify_ssl: bool = True
    retries: int = Field(default=3, ge=1)
    user_agent: str = f"mtgox-client/{__version__}"


class Settings(BaseSettings):
    env: str = "dev"
    api: ApiCfg = ApiCfg()
    exchange: ExchangeCfg = ExchangeCfg()
    # single exchange-wide fee rate; read each time an effective price is computed
    commission: Decimal = Field(default=Decimal("0.0065"), ge=0, lt=1)

    model_config = SettingsConfigDict(
        env_prefix="MTGOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",  # MTGOX_EXCHANGE__BASE_URL
        validate_assignment=True,
    )

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Settings":
        if path is None:
            return cls()

        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

        # credentials from the environment win over the YAML file
        ek = os.getenv("MTGOX_API_KEY")
        es = os.getenv("MTGOX_API_SECRET")
        if ek or es:
            cfg.setdefault("api", {})
            if ek:
                cfg["api"]["key"] = ek
            if es:
                cfg["api"]["secret"] = es

        return cls.model_validate(cfg)
