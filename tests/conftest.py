# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from cartlink.config.loader import CartLinkConfig

SHOP_DOMAIN = "biobarat.myshopify.com"

SCENARIO_CSV = (
    "Variant ID,Quantity\n"
    "gid://shopify/ProductVariant/42649849659629,3\n"
    "gid://shopify/ProductVariant/7,0\n"
)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("CARTLINK_SHOP_DOMAIN", raising=False)
        yield p


@pytest.fixture()
def config() -> CartLinkConfig:
    return CartLinkConfig(shop_domain=SHOP_DOMAIN)


@pytest.fixture()
def sample_config_yaml() -> str:
    return f"""shop_domain: {SHOP_DOMAIN}
variant_column: Variant ID
quantity_column: Quantity
error_log_dir: logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "cartlink.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def make_xlsx(path: Path, rows: list[list[object]], extra_sheets: dict[str, list[list[object]]] | None = None) -> Path:
    """Write rows (header first) as the first sheet of an xlsx file."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name="Order", header=False, index=False)
        for name, sheet_rows in (extra_sheets or {}).items():
            pd.DataFrame(sheet_rows).to_excel(writer, sheet_name=name, header=False, index=False)
    return path


@pytest.fixture()
def scenario_csv(temp_workdir: Path) -> Path:
    p = temp_workdir / "data" / "order.csv"
    p.write_text(SCENARIO_CSV, encoding="utf-8")
    return p


@pytest.fixture()
def scenario_xlsx(temp_workdir: Path) -> Path:
    return make_xlsx(
        temp_workdir / "data" / "order.xlsx",
        [
            ["Variant ID", "Quantity"],
            ["gid://shopify/ProductVariant/42649849659629", 3],
            ["gid://shopify/ProductVariant/7", 0],
        ],
    )


@pytest.fixture()
def xlsx_factory():
    return make_xlsx
