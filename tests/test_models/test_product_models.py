"""
Tests for portfolio_advisor/models/product.py and models/password.py.

What we test
------------
Product / UserProfile / Holding:
  - camelCase aliases (``yield``, ``minInvestment``, ``riskAppetite``) accepted.
  - snake_case field names accepted.
  - Category fields normalised; unknown values kept.
  - Records are frozen.

IdentityHints:
  - fragments() lower-cases, strips, drops blanks, derives the email local part.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from portfolio_advisor.models.password import IdentityHints
from portfolio_advisor.models.product import Holding, Product, UserProfile


class TestProduct:
    def test_camel_case_aliases(self):
        product = Product.model_validate({
            "id": 3, "name": "Real Estate REIT", "type": "REIT", "yield": 9.8,
            "risk": "medium", "minInvestment": 2500, "rating": 4.7,
            "totalInvestors": 12350, "tenure": "5+ years",
        })
        assert product.id == "3"
        assert product.annual_yield == pytest.approx(9.8)
        assert product.risk == "Medium"
        assert product.min_investment == pytest.approx(2500)
        assert product.total_investors == 12350
        assert product.features == []

    def test_unknown_type_kept(self, product_factory):
        assert product_factory(type="Hedge Fund").type == "Hedge Fund"

    def test_yield_required(self):
        with pytest.raises(ValidationError):
            Product.model_validate({"id": "1", "name": "x", "type": "REIT", "risk": "Low"})

    def test_frozen(self, product_factory):
        product = product_factory()
        with pytest.raises(ValidationError):
            product.rating = 1.0


class TestUserProfile:
    def test_aliases_and_defaults(self):
        user = UserProfile.model_validate({"riskAppetite": "aggressive", "userId": 7})
        assert user.risk_appetite == "Aggressive"
        assert user.user_id == "7"
        assert user.balance == 0.0
        assert user.email is None

    def test_appetite_required(self):
        with pytest.raises(ValidationError):
            UserProfile.model_validate({"balance": 100})


class TestHolding:
    def test_aliases(self):
        holding = Holding.model_validate({"type": "crypto fund", "risk": "HIGH", "productId": 4})
        assert holding.type == "Crypto Fund"
        assert holding.risk == "High"
        assert holding.product_id == "4"


class TestIdentityHints:
    def test_fragments(self):
        hints = IdentityHints(first_name=" John ", last_name="Doe", email="J.Doe@Example.com")
        assert hints.fragments() == ["john", "doe", "j.doe"]

    def test_explicit_local_part_wins(self):
        hints = IdentityHints(email="jdoe@example.com", email_local_part="johnny")
        assert hints.fragments() == ["johnny"]

    def test_blank_values_dropped(self):
        assert IdentityHints(first_name="", last_name="   ").fragments() == []

    def test_camel_case_aliases(self):
        hints = IdentityHints.model_validate({"firstName": "Ann", "emailLocalPart": "ann99"})
        assert hints.fragments() == ["ann", "ann99"]
