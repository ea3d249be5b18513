"""
Recommendation engine output models.

``Recommendation`` couples a catalog ``Product`` with its composite score,
the derived match percentage and up to three reasons.  ``PortfolioInsight``
is a qualitative observation about the user's holdings.

Both are frozen and built fresh per call; neither has identity beyond the
data it carries.  ``Recommendation.product`` is the caller's own instance,
not a copy.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from portfolio_advisor.models.product import Product
from portfolio_advisor.recommendations.scorer import MAX_REASONS, ScoreComponents, match_percentage
from portfolio_advisor.taxonomy.product_taxonomy import InsightType, Severity


class Recommendation(BaseModel):
    """A ranked product suggestion.

    Attributes:
        product: The recommended catalog entry.
        score: Composite score in [0, 1].
        match_percentage: ``score * 100`` rounded half up.
        reasons: Up to three explanation sentences, in evaluation order.
        components: Unweighted scoring terms behind ``score``.
    """

    model_config = ConfigDict(frozen=True)

    product: Product
    score: float
    match_percentage: int
    reasons: list[str] = []
    components: ScoreComponents

    @model_validator(mode="after")
    def validate_score_consistency(self) -> "Recommendation":
        if not 0.0 <= self.score <= 1.0:
            raise ValueError(f"score must be in [0.0, 1.0], got {self.score}.")
        expected = match_percentage(self.score)
        if self.match_percentage != expected:
            raise ValueError(
                f"match_percentage ({self.match_percentage}) must equal "
                f"score * 100 rounded half up ({expected})."
            )
        if len(self.reasons) > MAX_REASONS:
            raise ValueError(f"At most {MAX_REASONS} reasons allowed, got {len(self.reasons)}.")
        return self


class PortfolioInsight(BaseModel):
    """A qualitative finding about a user's portfolio.

    Attributes:
        type: Which check produced the insight.
        title: Short headline.
        description: One-sentence explanation.
        severity: Low / Medium / High.
        recommendations: Suggested follow-up actions, in display order.
    """

    model_config = ConfigDict(frozen=True)

    type: InsightType
    title: str
    description: str
    severity: Severity
    recommendations: list[str] = []

    @field_validator("title", "description")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title and description must not be empty.")
        return v
