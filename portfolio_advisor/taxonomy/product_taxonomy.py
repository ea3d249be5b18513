"""
Investment product taxonomy: product types, risk levels, risk appetites,
and the insight vocabulary used by the recommendation engine.

Rank tables
-----------
Risk levels and user risk appetites share one ordinal scale so they can be
compared directly::

    Low  / Conservative  -> 1
    Medium / Moderate    -> 2
    High / Aggressive    -> 3

Normalisers
-----------
Records coming from the web app, CSV exports or hand-written JSON spell
categories inconsistently ("EquityFund", "equity_fund", "HIGH").  The
``normalize_*`` helpers fold those variants onto the canonical enum value
and hand back unknown strings untouched, so scoring code can treat them as
the neutral case instead of failing.

This module has NO imports from any other ``portfolio_advisor`` package.
"""

from enum import StrEnum


class ProductType(StrEnum):
    """Catalog product families."""

    EQUITY_FUND = "Equity Fund"
    CORPORATE_BOND = "Corporate Bond"
    REIT = "REIT"
    CRYPTO_FUND = "Crypto Fund"
    GOVERNMENT_BOND = "Government Bond"
    SECTOR_FUND = "Sector Fund"


class RiskLevel(StrEnum):
    """Risk classification of a product or holding."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class RiskAppetite(StrEnum):
    """Self-declared user risk tolerance."""

    CONSERVATIVE = "Conservative"
    MODERATE = "Moderate"
    AGGRESSIVE = "Aggressive"


class InsightType(StrEnum):
    """Kinds of portfolio insight, in evaluation order."""

    RISK_DISTRIBUTION = "risk_distribution"
    DIVERSIFICATION = "diversification"
    PERFORMANCE = "performance"
    REBALANCING = "rebalancing"


class Severity(StrEnum):
    """Urgency of a portfolio insight."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# Fixed universe used for diversification checks; order matters for the
# "missing types" listing.
ALL_PRODUCT_TYPES: tuple[ProductType, ...] = tuple(ProductType)

RISK_RANK: dict[str, int] = {
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
}

APPETITE_RANK: dict[str, int] = {
    RiskAppetite.CONSERVATIVE: 1,
    RiskAppetite.MODERATE: 2,
    RiskAppetite.AGGRESSIVE: 3,
}

# Suggested counterweight for a dominant risk level.  A rotation, not an
# optimisation: anything unrecognised is pointed at High like Medium is.
COUNTER_RISK: dict[str, RiskLevel] = {
    RiskLevel.HIGH: RiskLevel.LOW,
    RiskLevel.LOW: RiskLevel.MEDIUM,
    RiskLevel.MEDIUM: RiskLevel.HIGH,
}


def _fold(value: str) -> str:
    return "".join(ch for ch in value.lower() if ch.isalnum())


_PRODUCT_TYPE_LOOKUP: dict[str, ProductType] = {_fold(m.value): m for m in ProductType}
_RISK_LOOKUP: dict[str, RiskLevel] = {_fold(m.value): m for m in RiskLevel}
_APPETITE_LOOKUP: dict[str, RiskAppetite] = {_fold(m.value): m for m in RiskAppetite}


def normalize_product_type(value: str) -> str:
    """Return the canonical ``ProductType`` value for ``value``, or ``value`` unchanged."""
    member = _PRODUCT_TYPE_LOOKUP.get(_fold(value))
    return member.value if member is not None else value


def normalize_risk(value: str) -> str:
    """Return the canonical ``RiskLevel`` value for ``value``, or ``value`` unchanged."""
    member = _RISK_LOOKUP.get(_fold(value))
    return member.value if member is not None else value


def normalize_appetite(value: str) -> str:
    """Return the canonical ``RiskAppetite`` value for ``value``, or ``value`` unchanged."""
    member = _APPETITE_LOOKUP.get(_fold(value))
    return member.value if member is not None else value
