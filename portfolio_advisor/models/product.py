"""
Input records for the recommendation engine.

``Product`` is one catalog entry, ``UserProfile`` one user snapshot and
``Holding`` the minimal projection of an existing investment (type + risk)
needed for diversification scoring.

All three are frozen: the engine reads them and never writes back.  Field
names are snake_case; the camelCase spellings used by the web app
(``minInvestment``, ``riskAppetite``, ``yield``, ...) are accepted as
aliases so exported records validate unchanged.

Category fields (``type``, ``risk``, ``risk_appetite``) are passed through
the taxonomy normalisers.  Unrecognised values are kept as plain strings
rather than rejected: the scoring functions treat them as the neutral case.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from portfolio_advisor.taxonomy.product_taxonomy import (
    normalize_appetite,
    normalize_product_type,
    normalize_risk,
)

_RECORD_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class Product(BaseModel):
    """An investment product from the catalog.

    Attributes:
        id: Catalog identifier (coerced to ``str``).
        name: Display name.
        type: Product family; canonical ``ProductType`` value when recognised.
        annual_yield: Expected annual yield in percent (alias ``yield``).
        risk: Risk level; canonical ``RiskLevel`` value when recognised.
        min_investment: Minimum ticket size in account currency.
        rating: Investor rating, nominally 0.0–5.0.
        total_investors: Number of investors holding the product.
        tenure: Suggested holding period, e.g. ``"3-5 years"``.
        description: Marketing description.
        features: Bullet-point feature list.
    """

    model_config = _RECORD_CONFIG

    id: str
    name: str
    type: str
    annual_yield: float = Field(alias="yield")
    risk: str
    min_investment: float = 0.0
    rating: float = 0.0
    total_investors: int = 0
    tenure: Optional[str] = None
    description: Optional[str] = None
    features: list[str] = []

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        return str(v)

    @field_validator("type")
    @classmethod
    def canonical_type(cls, v: str) -> str:
        return normalize_product_type(v)

    @field_validator("risk")
    @classmethod
    def canonical_risk(cls, v: str) -> str:
        return normalize_risk(v)


class UserProfile(BaseModel):
    """Snapshot of one user's investing profile.

    Identity fields are optional and only consulted by the password
    analyzer for personal-information leakage.
    """

    model_config = _RECORD_CONFIG

    risk_appetite: str
    balance: float = 0.0
    total_investments: int = 0
    portfolio_value: float = 0.0
    average_return: float = 0.0
    user_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    @field_validator("risk_appetite")
    @classmethod
    def canonical_appetite(cls, v: str) -> str:
        return normalize_appetite(v)

    @field_validator("user_id", mode="before")
    @classmethod
    def coerce_user_id(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)


class Holding(BaseModel):
    """An existing position, reduced to what diversification scoring needs."""

    model_config = _RECORD_CONFIG

    type: str
    risk: str
    product_id: Optional[str] = None
    amount: Optional[float] = None

    @field_validator("type")
    @classmethod
    def canonical_type(cls, v: str) -> str:
        return normalize_product_type(v)

    @field_validator("risk")
    @classmethod
    def canonical_risk(cls, v: str) -> str:
        return normalize_risk(v)

    @field_validator("product_id", mode="before")
    @classmethod
    def coerce_product_id(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)
