from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load YAML config (default config/cartlink.yml)
- Validate against the bundled config_schema.json
- Apply defaults for the optional keys
- Apply overrides: CARTLINK_SHOP_DOMAIN env var, then explicit CLI values
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/cartlink.yml")
SHOP_DOMAIN_ENV = "CARTLINK_SHOP_DOMAIN"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class CartLinkConfig:
    shop_domain: str  # e.g. biobarat.myshopify.com
    variant_column: str = "Variant ID"
    quantity_column: str = "Quantity"
    error_log_dir: str = "logs"


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the data
            fails validation (missing keys, wrong types, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _from_mapping(data: dict[str, Any]) -> CartLinkConfig:
    _validate_config_schema(data)
    defaults = CartLinkConfig(shop_domain=data["shop_domain"])
    return CartLinkConfig(
        shop_domain=data["shop_domain"],
        variant_column=data.get("variant_column", defaults.variant_column),
        quantity_column=data.get("quantity_column", defaults.quantity_column),
        error_log_dir=data.get("error_log_dir", defaults.error_log_dir),
    )


def load_config(path: Path) -> CartLinkConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config validation failed: top level must be a mapping: {path}")
    return _from_mapping(data)


def resolve_config(path: Path = DEFAULT_CONFIG_PATH, shop_domain: str | None = None) -> CartLinkConfig:
    """Load config with overrides applied.

    Precedence for shop_domain: explicit argument > CARTLINK_SHOP_DOMAIN >
    config file. A missing config file is only an error when neither override
    provides a domain; in that case every other key takes its default.
    """
    override = shop_domain or os.getenv(SHOP_DOMAIN_ENV) or None
    if path.exists():
        cfg = load_config(path)
        if override is None:
            return cfg
        # 上書き値もスキーマで検証する
        _validate_config_schema({"shop_domain": override})
        return replace(cfg, shop_domain=override)
    if override is None:
        raise ConfigError(
            f"config file not found: {path} (or set {SHOP_DOMAIN_ENV} / --shop-domain)"
        )
    return _from_mapping({"shop_domain": override})
