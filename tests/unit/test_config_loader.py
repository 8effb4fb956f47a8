from __future__ import annotations

from pathlib import Path

import pytest

from cartlink.config.loader import CartLinkConfig, ConfigError, load_config, resolve_config


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg == CartLinkConfig(shop_domain="biobarat.myshopify.com")


def test_load_config_defaults(temp_workdir: Path):
    path = temp_workdir / "config" / "cartlink.yml"
    path.write_text("shop_domain: shop.example.com\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.variant_column == "Variant ID"
    assert cfg.quantity_column == "Quantity"
    assert cfg.error_log_dir == "logs"


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("shop_domain: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(write_config)


def test_load_config_missing_required(write_config: Path):
    write_config.write_text("variant_column: Variant ID\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


@pytest.mark.parametrize(
    "domain",
    ["https://shop.example.com", "shop.example.com/cart", "localhost", "shop example.com"],
)
def test_load_config_rejects_bad_domain(write_config: Path, domain: str):
    write_config.write_text(f"shop_domain: '{domain}'\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_non_mapping(write_config: Path):
    write_config.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_resolve_env_overrides_file(write_config: Path, monkeypatch):
    monkeypatch.setenv("CARTLINK_SHOP_DOMAIN", "env.example.com")
    cfg = resolve_config(write_config)
    assert cfg.shop_domain == "env.example.com"
    assert cfg.error_log_dir == "logs"


def test_resolve_argument_overrides_env(write_config: Path, monkeypatch):
    monkeypatch.setenv("CARTLINK_SHOP_DOMAIN", "env.example.com")
    cfg = resolve_config(write_config, shop_domain="cli.example.com")
    assert cfg.shop_domain == "cli.example.com"


def test_resolve_without_file_uses_override(temp_workdir: Path, monkeypatch):
    monkeypatch.setenv("CARTLINK_SHOP_DOMAIN", "env.example.com")
    cfg = resolve_config(temp_workdir / "config" / "missing.yml")
    assert cfg == CartLinkConfig(shop_domain="env.example.com")


def test_resolve_without_file_or_override(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        resolve_config(temp_workdir / "config" / "missing.yml")


def test_resolve_validates_override(write_config: Path):
    with pytest.raises(ConfigError, match="config validation failed"):
        resolve_config(write_config, shop_domain="https://bad/")
