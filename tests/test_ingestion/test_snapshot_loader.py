"""
Tests for portfolio_advisor/ingestion/snapshot_loader.py.

What we test
------------
  - The shipped catalog and sample files load and validate.
  - camelCase keys and integer ids are accepted.
  - Missing file -> FileNotFoundError.
  - Malformed JSON, non-UTF-8 bytes, a directory path, wrong top-level
    shape, invalid records -> SnapshotError.
  - Duplicate product ids are rejected.
  - Only the first five record errors are listed.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from portfolio_advisor.ingestion.snapshot_loader import (
    SnapshotError,
    load_catalog,
    load_holdings,
    load_profile,
)

_ROOT = Path(__file__).resolve().parents[2]


def _product(pid, **overrides):
    record = {
        "id": pid, "name": f"Product {pid}", "type": "REIT", "yield": 9.8,
        "risk": "Medium", "minInvestment": 2500, "rating": 4.7, "totalInvestors": 10,
    }
    record.update(overrides)
    return record


class TestShippedFiles:
    def test_catalog(self):
        products = load_catalog(_ROOT / "config" / "catalog" / "products.json")
        assert [p.id for p in products] == ["1", "2", "3", "4", "5", "6"]
        reit = products[2]
        assert reit.type == "REIT"
        assert reit.annual_yield == pytest.approx(9.8)
        assert reit.min_investment == pytest.approx(2500)

    def test_profile(self):
        profile = load_profile(_ROOT / "config" / "samples" / "profile.json")
        assert profile.risk_appetite == "Moderate"
        assert profile.first_name == "John"

    def test_holdings(self):
        holdings = load_holdings(_ROOT / "config" / "samples" / "holdings.json")
        assert len(holdings) == 3
        assert {h.type for h in holdings} == {"Equity Fund", "Corporate Bond", "Crypto Fund"}


class TestLoadCatalog:
    def test_camel_case_and_int_ids(self, write_json):
        path = write_json("catalog.json", [_product(1), _product(2, type="equity_fund")])
        products = load_catalog(path)
        assert [p.id for p in products] == ["1", "2"]
        assert products[1].type == "Equity Fund"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(SnapshotError, match="JSON parse error"):
            load_catalog(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin.json"
        path.write_bytes(b"\xff[]")
        with pytest.raises(SnapshotError, match="not valid UTF-8"):
            load_catalog(path)

    def test_directory_path(self, tmp_path):
        with pytest.raises(SnapshotError, match="cannot read file"):
            load_holdings(tmp_path)

    def test_object_instead_of_array(self, write_json):
        with pytest.raises(SnapshotError, match="JSON array"):
            load_catalog(write_json("catalog.json", {"products": []}))

    def test_invalid_record(self, write_json):
        bad = _product(1)
        del bad["yield"]
        with pytest.raises(SnapshotError, match="1 Product record"):
            load_catalog(write_json("catalog.json", [bad]))

    def test_non_object_record(self, write_json):
        with pytest.raises(SnapshotError, match="not a JSON object"):
            load_catalog(write_json("catalog.json", [_product(1), "oops"]))

    def test_duplicate_ids(self, write_json):
        path = write_json("catalog.json", [_product(1), _product("1"), _product(2)])
        with pytest.raises(SnapshotError, match="duplicate product id"):
            load_catalog(path)

    def test_error_listing_is_truncated(self, write_json):
        path = write_json("catalog.json", [{"id": i} for i in range(8)])
        with pytest.raises(SnapshotError) as exc_info:
            load_catalog(path)
        message = str(exc_info.value)
        assert "8 Product record(s) failed validation" in message
        assert "... and 3 more." in message


class TestLoadHoldingsAndProfile:
    def test_empty_holdings(self, write_json):
        assert load_holdings(write_json("holdings.json", [])) == []

    def test_holding_extra_keys_ignored(self, write_json):
        path = write_json("holdings.json", [{"type": "REIT", "risk": "medium", "name": "x"}])
        holdings = load_holdings(path)
        assert holdings[0].risk == "Medium"

    def test_profile_must_be_object(self, write_json):
        with pytest.raises(SnapshotError, match="JSON object"):
            load_profile(write_json("profile.json", []))

    def test_profile_missing_appetite(self, write_json):
        with pytest.raises(SnapshotError, match="invalid profile"):
            load_profile(write_json("profile.json", {"balance": 10}))
