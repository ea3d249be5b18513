"""
Per-product-type copy: long-form catalog descriptions and the one-line
highlight used as a recommendation reason.

Both lookups are keyed by ``ProductType``.  Unknown types get a generic
description and no highlight.
"""

from __future__ import annotations

from typing import Optional

from portfolio_advisor.models.product import Product
from portfolio_advisor.taxonomy.product_taxonomy import ProductType

_DESCRIPTION_TEMPLATES: dict[str, str] = {
    ProductType.EQUITY_FUND: (
        "A professionally managed equity fund focusing on {risk}-risk investments "
        "with potential for {yield_pct}% annual returns. This fund provides exposure "
        "to carefully selected stocks across various sectors, managed by experienced "
        "fund managers with a proven track record."
    ),
    ProductType.CORPORATE_BOND: (
        "A fixed-income investment offering {yield_pct}% annual yield with {risk} "
        "risk profile. This corporate bond provides stable returns through regular "
        "interest payments and capital preservation, making it suitable for "
        "conservative investors seeking predictable income."
    ),
    ProductType.REIT: (
        "A Real Estate Investment Trust providing exposure to commercial real estate "
        "with {yield_pct}% expected returns. This REIT offers the benefits of real "
        "estate investment with added liquidity, professional management, and regular "
        "dividend distributions."
    ),
    ProductType.CRYPTO_FUND: (
        "A diversified cryptocurrency fund targeting {yield_pct}% returns through "
        "strategic allocation across major digital assets. This fund provides exposure "
        "to the crypto market while managing risk through professional portfolio "
        "management and advanced risk controls."
    ),
    ProductType.GOVERNMENT_BOND: (
        "A government-backed security offering {yield_pct}% yield with minimal risk. "
        "This investment provides capital preservation and regular income through "
        "government-guaranteed returns, making it ideal for risk-averse investors."
    ),
    ProductType.SECTOR_FUND: (
        "A specialized sector fund focusing on specific industry segments with "
        "{yield_pct}% potential returns. This fund provides targeted exposure to "
        "high-growth sectors while maintaining a {risk}-risk investment profile."
    ),
}

_FALLBACK_TEMPLATE = (
    "An investment product offering {yield_pct}% returns with {risk} risk profile."
)

_TYPE_HIGHLIGHTS: dict[str, str] = {
    ProductType.EQUITY_FUND:     "Growth potential in equity markets",
    ProductType.CORPORATE_BOND:  "Stable fixed-income returns",
    ProductType.REIT:            "Real estate exposure with liquidity",
    ProductType.CRYPTO_FUND:     "Digital asset diversification",
    ProductType.GOVERNMENT_BOND: "Government-backed capital preservation",
    ProductType.SECTOR_FUND:     "Targeted exposure to high-growth sectors",
}


def describe_product(product: Product) -> str:
    """Return the catalog description for ``product``.

    The template is chosen by ``product.type`` and interpolates the yield
    and the lower-cased risk level.
    """
    template = _DESCRIPTION_TEMPLATES.get(product.type, _FALLBACK_TEMPLATE)
    return template.format(
        yield_pct=f"{product.annual_yield:g}",
        risk=str(product.risk).lower(),
    )


def type_highlight(product_type: str) -> Optional[str]:
    """One-line selling point for a product family, or ``None`` if unknown."""
    return _TYPE_HIGHLIGHTS.get(product_type)
