"""
Recommendation scoring: rates one catalog product against a user profile
and the user's existing holdings.

Score formula (weighted sum, clamped to 0–1)
---------------------------------------------
    total = clamp(
        risk_match        * 0.40   # product risk vs. user risk appetite
        + yield_score     * 0.25   # yield attractiveness
        + affordability   * 0.20   # balance covers the minimum ticket
        + diversification * 0.15   # novelty relative to current holdings
    , 0, 1)

Component explanations
----------------------
risk_match (0.3 / 0.7 / 1.0):
    Risk levels and appetites share the ordinal scale Low/Conservative=1,
    Medium/Moderate=2, High/Aggressive=3.  Same rank → 1.0, one step apart
    → 0.7, anything else (including unknown values) → 0.3.

yield_score (0–1):
    annual_yield / 20, clamped.  A 20%+ yield saturates the term so one
    outlier cannot dominate the ranking.

affordability (0 or 1):
    1.0 when balance >= min_investment.  A scoring term, not a filter: an
    unaffordable product can still surface when everything else is strong.

diversification (0–1):
    No holdings → 1.0.  Otherwise +0.5 for an unheld type, +0.3 for an
    unheld risk level, −0.4 when more than two holdings already share both
    type and risk; clamped.

Reasons
-------
``build_reasons()`` evaluates, in this fixed order, risk tier, yield tier,
affordability tier, diversification, the per-type highlight and the rating
tier, and keeps the first three sentences produced.

``match_percentage()`` turns the 0–1 total into a whole percentage with
halves rounded up (0.505 → 51).

All functions are pure: no I/O and no global state.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from portfolio_advisor.models.product import Holding, Product, UserProfile
from portfolio_advisor.recommendations.descriptions import type_highlight
from portfolio_advisor.taxonomy.product_taxonomy import APPETITE_RANK, RISK_RANK

# ── Weights ───────────────────────────────────────────────────────────────────
RISK_MATCH_WEIGHT = 0.40
YIELD_WEIGHT = 0.25
AFFORDABILITY_WEIGHT = 0.20
DIVERSIFICATION_WEIGHT = 0.15

# ── Risk match tiers ─────────────────────────────────────────────────────────
RISK_MATCH_EXACT = 1.0
RISK_MATCH_ADJACENT = 0.7
RISK_MATCH_DISTANT = 0.3

# ── Yield ────────────────────────────────────────────────────────────────────
YIELD_SATURATION_PCT = 20.0

# ── Diversification ──────────────────────────────────────────────────────────
NEW_TYPE_BONUS = 0.5
NEW_RISK_BONUS = 0.3
CROWDING_PENALTY = 0.4
CROWDING_LIMIT = 2          # penalty applies above this many look-alike holdings

# ── Reason thresholds ────────────────────────────────────────────────────────
RISK_REASON_STRONG = 0.8
RISK_REASON_GOOD = 0.6
YIELD_REASON_HIGH = 12.0
YIELD_REASON_ATTRACTIVE = 8.0
AFFORDABILITY_COMFORT_MULTIPLE = 2.0
DIVERSIFICATION_REASON = 0.7
RATING_REASON_HIGH = 4.5
RATING_REASON_GOOD = 4.0
MAX_REASONS = 3


@dataclass(frozen=True)
class ScoreComponents:
    """Raw (unweighted) scoring terms for one product.

    Attributes:
        risk_match:      0.3, 0.7 or 1.0.
        yield_score:     0–1, saturating at a 20% yield.
        affordability:   0.0 or 1.0.
        diversification: 0–1.
    """

    risk_match:      float
    yield_score:     float
    affordability:   float
    diversification: float

    @property
    def total(self) -> float:
        """Weighted composite score, clamped to [0, 1]."""
        return _clamp(
            self.risk_match        * RISK_MATCH_WEIGHT
            + self.yield_score     * YIELD_WEIGHT
            + self.affordability   * AFFORDABILITY_WEIGHT
            + self.diversification * DIVERSIFICATION_WEIGHT,
            0.0,
            1.0,
        )

    def as_dict(self) -> dict[str, float]:
        return {
            "risk_match":      self.risk_match,
            "yield_score":     self.yield_score,
            "affordability":   self.affordability,
            "diversification": self.diversification,
            "total":           self.total,
        }


def risk_match(product_risk: str, risk_appetite: str) -> float:
    """Score how well a product's risk level fits the user's appetite."""
    product_rank = RISK_RANK.get(product_risk)
    user_rank = APPETITE_RANK.get(risk_appetite)
    if product_rank is None or user_rank is None:
        return RISK_MATCH_DISTANT
    if product_rank == user_rank:
        return RISK_MATCH_EXACT
    if abs(product_rank - user_rank) == 1:
        return RISK_MATCH_ADJACENT
    return RISK_MATCH_DISTANT


def yield_score(annual_yield: float) -> float:
    return _clamp(annual_yield / YIELD_SATURATION_PCT, 0.0, 1.0)


def affordability_score(balance: float, min_investment: float) -> float:
    return 1.0 if balance >= min_investment else 0.0


def diversification_score(product: Product, holdings: Sequence[Holding]) -> float:
    """Score how much ``product`` would broaden the user's current holdings.

    The first investment is maximally diversifying by definition.
    """
    if not holdings:
        return 1.0

    held_types = {h.type for h in holdings}
    held_risks = {h.risk for h in holdings}

    score = 0.0
    if product.type not in held_types:
        score += NEW_TYPE_BONUS
    if product.risk not in held_risks:
        score += NEW_RISK_BONUS

    similar = sum(1 for h in holdings if h.type == product.type and h.risk == product.risk)
    if similar > CROWDING_LIMIT:
        score -= CROWDING_PENALTY

    return _clamp(score, 0.0, 1.0)


def compute_score(
    product:  Product,
    user:     UserProfile,
    holdings: Sequence[Holding],
) -> ScoreComponents:
    """Compute every scoring term for one product.

    Args:
        product:  Candidate catalog entry.
        user:     The user being advised.
        holdings: The user's current positions (may be empty).

    Returns:
        ScoreComponents; ``.total`` is the composite score.
    """
    return ScoreComponents(
        risk_match=risk_match(product.risk, user.risk_appetite),
        yield_score=yield_score(product.annual_yield),
        affordability=affordability_score(user.balance, product.min_investment),
        diversification=diversification_score(product, holdings),
    )


def build_reasons(
    product:     Product,
    user:        UserProfile,
    components:  ScoreComponents,
    max_reasons: int = MAX_REASONS,
) -> list[str]:
    """Assemble up to ``max_reasons`` human-readable reasons for a product.

    Returns:
        Reason sentences in fixed evaluation order, truncated.
    """
    reasons: list[str] = []

    # Risk fit
    if components.risk_match > RISK_REASON_STRONG:
        reasons.append(
            f"Perfect match for your {str(user.risk_appetite).lower()} risk appetite"
        )
    elif components.risk_match > RISK_REASON_GOOD:
        reasons.append("Good fit for your risk tolerance")

    # Yield
    if product.annual_yield > YIELD_REASON_HIGH:
        reasons.append(f"High potential returns ({_pct(product.annual_yield)}%)")
    elif product.annual_yield > YIELD_REASON_ATTRACTIVE:
        reasons.append(f"Attractive returns ({_pct(product.annual_yield)}%)")

    # Affordability
    if user.balance >= product.min_investment * AFFORDABILITY_COMFORT_MULTIPLE:
        reasons.append("Well within your investment capacity")
    elif user.balance >= product.min_investment:
        reasons.append("Affordable with your current balance")

    # Diversification
    if components.diversification > DIVERSIFICATION_REASON:
        reasons.append("Adds diversification to your portfolio")

    # Product family
    highlight = type_highlight(product.type)
    if highlight:
        reasons.append(highlight)

    # Rating
    if product.rating > RATING_REASON_HIGH:
        reasons.append(f"Highly rated by investors ({_pct(product.rating)}/5)")
    elif product.rating > RATING_REASON_GOOD:
        reasons.append("Well-rated investment option")

    return reasons[:max_reasons]


def match_percentage(score: float) -> int:
    """Express ``score`` as a whole percentage, rounding halves up.

    The product is first rounded to nine places so float noise such as
    ``50.49999999999999`` for a 0.505 score still lands on 51.
    """
    return math.floor(round(score * 100, 9) + 0.5)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _pct(value: float) -> str:
    """Render 9.0 as ``9`` and 9.8 as ``9.8``."""
    return f"{value:g}"
