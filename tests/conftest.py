"""
Shared pytest fixtures for the portfolio advisor test suite.

Provides:
  - ``catalog``: the six-product seed catalog as ``Product`` models.
  - ``moderate_user`` / ``conservative_user``: sample ``UserProfile`` snapshots.
  - ``sample_holdings``: three existing positions (two High, one Low).
  - ``write_json``: helper that writes a JSON payload into ``tmp_path``.
  - ``product_factory``: keyword-driven ``Product`` builder with defaults.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from portfolio_advisor.models.product import Holding, Product, UserProfile


def make_product(
    id: str = "p1",
    name: str = "Sample Product",
    type: str = "REIT",
    annual_yield: float = 9.8,
    risk: str = "Medium",
    min_investment: float = 2500.0,
    rating: float = 4.7,
    total_investors: int = 100,
) -> Product:
    return Product(
        id=id,
        name=name,
        type=type,
        annual_yield=annual_yield,
        risk=risk,
        min_investment=min_investment,
        rating=rating,
        total_investors=total_investors,
    )


@pytest.fixture
def catalog() -> list[Product]:
    """The seed catalog shipped in ``config/catalog/products.json``."""
    return [
        make_product("1", "Tech Growth Fund", "Equity Fund", 12.5, "High", 1000, 4.8, 15420),
        make_product("2", "Green Energy Bond", "Corporate Bond", 8.2, "Low", 500, 4.6, 8930),
        make_product("3", "Real Estate REIT", "REIT", 9.8, "Medium", 2500, 4.7, 12350),
        make_product("4", "Crypto Index Fund", "Crypto Fund", 15.2, "High", 2000, 4.3, 6780),
        make_product("5", "Government Securities", "Government Bond", 6.5, "Low", 100, 4.9, 45600),
        make_product("6", "Healthcare Innovation Fund", "Sector Fund", 11.3, "Medium", 1500, 4.5, 9870),
    ]


@pytest.fixture
def moderate_user() -> UserProfile:
    return UserProfile(
        risk_appetite="Moderate",
        balance=5000.0,
        total_investments=12,
        portfolio_value=16500.0,
        average_return=8.7,
        first_name="John",
        last_name="Doe",
        email="john.doe@example.com",
    )


@pytest.fixture
def conservative_user() -> UserProfile:
    return UserProfile(
        risk_appetite="Conservative",
        balance=100.0,
        average_return=4.0,
    )


@pytest.fixture
def sample_holdings() -> list[Holding]:
    return [
        Holding(type="Equity Fund", risk="High"),
        Holding(type="Corporate Bond", risk="Low"),
        Holding(type="Crypto Fund", risk="High"),
    ]


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Return a helper that dumps ``payload`` to ``tmp_path / name``."""

    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def product_factory() -> Callable[..., Product]:
    """Return ``make_product`` so tests can build one-off products by keyword."""
    return make_product
