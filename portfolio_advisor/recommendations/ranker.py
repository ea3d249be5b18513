"""
Recommendation ranker: scores a product catalog for one user and returns
the top-N suggestions.

Usage flow
----------
1. score_catalog(catalog, user, holdings)
   -> list[Recommendation]  (one per product, catalog order, unfiltered)

2. recommend_products(catalog, user, holdings, top_n=5, min_score=0.30)
   -> list[Recommendation]  (score > min_score, score descending, top_n)

Ties on score keep catalog input order (Python's sort is stable), so the
same inputs always produce the same ranking.

Inputs may be model instances or plain mappings; mappings are validated
into ``Product`` / ``UserProfile`` / ``Holding`` first.  Caller-owned
objects are never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Union

from portfolio_advisor.models.product import Holding, Product, UserProfile
from portfolio_advisor.models.recommendation import Recommendation
from portfolio_advisor.recommendations.scorer import (
    build_reasons,
    compute_score,
    match_percentage,
)

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5
DEFAULT_MIN_SCORE = 0.30

ProductLike = Union[Product, Mapping[str, Any]]
UserLike = Union[UserProfile, Mapping[str, Any]]
HoldingLike = Union[Holding, Product, Mapping[str, Any]]


def score_catalog(
    catalog:  Iterable[ProductLike],
    user:     UserLike,
    holdings: Iterable[HoldingLike] = (),
) -> list[Recommendation]:
    """Score every product in ``catalog`` without filtering or sorting.

    Args:
        catalog:  Candidate products.
        user:     The user being advised.
        holdings: The user's existing positions.

    Returns:
        One Recommendation per product, in catalog order.
    """
    profile = as_user(user)
    positions = as_holdings(holdings)

    scored: list[Recommendation] = []
    for product in as_products(catalog):
        components = compute_score(product, profile, positions)
        score = components.total
        scored.append(
            Recommendation(
                product=product,
                score=score,
                match_percentage=match_percentage(score),
                reasons=build_reasons(product, profile, components),
                components=components,
            )
        )
    return scored


def recommend_products(
    catalog:   Iterable[ProductLike],
    user:      UserLike,
    holdings:  Iterable[HoldingLike] = (),
    *,
    top_n:     int = DEFAULT_TOP_N,
    min_score: float = DEFAULT_MIN_SCORE,
) -> list[Recommendation]:
    """Rank ``catalog`` for ``user`` and return the best matches.

    Products scoring ``<= min_score`` are dropped.  Survivors are sorted by
    score descending (ties keep catalog order) and truncated to ``top_n``.

    Args:
        catalog:   Candidate products.
        user:      The user being advised.
        holdings:  The user's existing positions (empty = first investment).
        top_n:     Maximum number of recommendations returned.
        min_score: Exclusive inclusion threshold.

    Returns:
        At most ``top_n`` Recommendations, best first.
    """
    scored = score_catalog(catalog, user, holdings)
    eligible = [rec for rec in scored if rec.score > min_score]
    ranked = sorted(eligible, key=lambda rec: -rec.score)[: max(top_n, 0)]

    logger.debug(
        "Scored %d products: %d above %.2f, returning %d.",
        len(scored), len(eligible), min_score, len(ranked),
    )
    return ranked


# ── Input coercion ────────────────────────────────────────────────────────────

def as_products(catalog: Iterable[ProductLike]) -> list[Product]:
    return [p if isinstance(p, Product) else Product.model_validate(p) for p in catalog]


def as_user(user: UserLike) -> UserProfile:
    return user if isinstance(user, UserProfile) else UserProfile.model_validate(user)


def as_holdings(holdings: Iterable[HoldingLike]) -> list[Holding]:
    """Coerce holdings; a ``Product`` counts as a holding of its type and risk."""
    positions: list[Holding] = []
    for h in holdings:
        if isinstance(h, Holding):
            positions.append(h)
        elif isinstance(h, Product):
            positions.append(Holding(type=h.type, risk=h.risk, product_id=h.id))
        else:
            positions.append(Holding.model_validate(h))
    return positions
