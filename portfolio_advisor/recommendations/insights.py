"""
Portfolio insights: qualitative checks over a user's holdings.

Checks (evaluated in this order; each emits at most one insight)
-----------------------------------------------------------------
1. Risk distribution : dominant risk level holds > 60% of positions.
                       Severity High above 80%, otherwise Medium.
2. Diversification   : score = 1 − missing_types / 6 below 0.6.
                       Severity High below 0.3, otherwise Medium.
3. Performance       : average return below 3% (High) or below 5% (Medium).
4. Rebalancing       : more than three holdings; always a Low reminder.

No ranking or truncation is applied; every insight that fires is returned.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from portfolio_advisor.models.product import Holding, UserProfile
from portfolio_advisor.models.recommendation import PortfolioInsight
from portfolio_advisor.recommendations.ranker import HoldingLike, UserLike, as_holdings, as_user
from portfolio_advisor.taxonomy.product_taxonomy import (
    ALL_PRODUCT_TYPES,
    COUNTER_RISK,
    InsightType,
    RiskLevel,
    Severity,
)

logger = logging.getLogger(__name__)

RISK_CONCENTRATION_LIMIT = 0.6
RISK_CONCENTRATION_SEVERE = 0.8
DIVERSIFICATION_TARGET = 0.6
DIVERSIFICATION_SEVERE = 0.3
MAX_MISSING_TYPES = 3
RETURN_CRITICAL_PCT = 3.0
RETURN_WARNING_PCT = 5.0
REBALANCING_MIN_HOLDINGS = 3    # reminder fires above this count


@dataclass(frozen=True)
class RiskDistribution:
    """Share of holdings at the most common risk level.

    ``severity`` is ``None`` when the concentration is acceptable.
    """

    dominant_risk:    str
    dominant_share:   float
    recommended_risk: str
    severity:         Optional[Severity]

    @property
    def needs_rebalancing(self) -> bool:
        return self.severity is not None


@dataclass(frozen=True)
class Diversification:
    score:         float
    missing_types: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Performance:
    severity:        Optional[Severity]
    message:         str = ""
    recommendations: list[str] = field(default_factory=list)


def analyze_risk_distribution(holdings: list[Holding]) -> Optional[RiskDistribution]:
    """Find the dominant risk level; ``None`` for an empty portfolio.

    Ties go to the level that appears first in ``holdings``.
    """
    if not holdings:
        return None

    counts = Counter(h.risk for h in holdings)
    dominant_risk, dominant_count = max(counts.items(), key=lambda kv: kv[1])
    share = dominant_count / len(holdings)

    if share > RISK_CONCENTRATION_SEVERE:
        severity: Optional[Severity] = Severity.HIGH
    elif share > RISK_CONCENTRATION_LIMIT:
        severity = Severity.MEDIUM
    else:
        severity = None

    return RiskDistribution(
        dominant_risk=dominant_risk,
        dominant_share=share,
        recommended_risk=COUNTER_RISK.get(dominant_risk, RiskLevel.HIGH).value,
        severity=severity,
    )


def analyze_diversification(holdings: list[Holding]) -> Diversification:
    """Score type coverage against the fixed six-type universe."""
    held = {h.type for h in holdings}
    missing = [t.value for t in ALL_PRODUCT_TYPES if t not in held]
    score = 1.0 - len(missing) / len(ALL_PRODUCT_TYPES)
    return Diversification(score=score, missing_types=missing[:MAX_MISSING_TYPES])


def analyze_performance(user: UserProfile) -> Performance:
    if user.average_return < RETURN_CRITICAL_PCT:
        return Performance(
            severity=Severity.HIGH,
            message="Your portfolio is underperforming with very low returns.",
            recommendations=[
                "Consider higher-yield investment options",
                "Review your current investment strategy",
                "Consult with a financial advisor",
            ],
        )
    if user.average_return < RETURN_WARNING_PCT:
        return Performance(
            severity=Severity.MEDIUM,
            message="Your portfolio returns are below market average.",
            recommendations=[
                "Diversify into growth-oriented investments",
                "Consider rebalancing your portfolio",
                "Review investment fees and costs",
            ],
        )
    return Performance(severity=None)


def derive_portfolio_insights(
    user:     UserLike,
    holdings: Iterable[HoldingLike] = (),
) -> list[PortfolioInsight]:
    """Run every portfolio check and return the insights that fire.

    Args:
        user:     The user whose portfolio is examined.
        holdings: The user's current positions.

    Returns:
        Zero to four insights, in fixed check order.
    """
    profile = as_user(user)
    positions = as_holdings(holdings)
    insights: list[PortfolioInsight] = []

    risk = analyze_risk_distribution(positions)
    if risk is not None and risk.severity is not None:
        insights.append(
            PortfolioInsight(
                type=InsightType.RISK_DISTRIBUTION,
                title="Risk Distribution Imbalance",
                description=(
                    f"Your portfolio is {risk.dominant_risk} heavy. "
                    "Consider diversifying risk levels."
                ),
                severity=risk.severity,
                recommendations=[
                    f"Add more {risk.recommended_risk} risk investments",
                    f"Consider reducing {risk.dominant_risk} risk exposure",
                    "Aim for a balanced risk distribution",
                ],
            )
        )

    div = analyze_diversification(positions)
    if div.score < DIVERSIFICATION_TARGET:
        insights.append(
            PortfolioInsight(
                type=InsightType.DIVERSIFICATION,
                title="Portfolio Diversification",
                description=(
                    "Your portfolio lacks diversification across "
                    f"{', '.join(div.missing_types)}."
                ),
                severity=Severity.HIGH if div.score < DIVERSIFICATION_SEVERE else Severity.MEDIUM,
                recommendations=[
                    f"Consider adding {div.missing_types[0]} investments",
                    "Diversify across different asset classes",
                    "Balance between growth and income investments",
                ],
            )
        )

    perf = analyze_performance(profile)
    if perf.severity is not None:
        insights.append(
            PortfolioInsight(
                type=InsightType.PERFORMANCE,
                title="Performance Optimization",
                description=perf.message,
                severity=perf.severity,
                recommendations=perf.recommendations,
            )
        )

    if len(positions) > REBALANCING_MIN_HOLDINGS:
        insights.append(
            PortfolioInsight(
                type=InsightType.REBALANCING,
                title="Portfolio Rebalancing",
                description=(
                    "Your portfolio may benefit from rebalancing to maintain "
                    "target allocation."
                ),
                severity=Severity.LOW,
                recommendations=[
                    "Review your investment allocation quarterly",
                    "Consider automatic rebalancing features",
                    "Adjust based on market conditions",
                ],
            )
        )

    logger.debug(
        "Derived %d insight(s) from %d holding(s): %s",
        len(insights), len(positions), [i.type.value for i in insights],
    )
    return insights
