"""
Tests for portfolio_advisor/recommendations/insights.py.

What we test
------------
derive_portfolio_insights():
  - Sample holdings (2× High, 1× Low) -> Medium risk + Medium diversification.
  - Four holdings always produce a Low rebalancing reminder.
  - Empty holdings -> only a High diversification insight (healthy returns).
  - Fixed emission order: risk, diversification, performance, rebalancing.
  - Performance severity by average return.

analyze_* helpers:
  - Risk concentration thresholds, counter-risk rotation, tie-break.
  - Diversification score and missing-type listing.
"""

from __future__ import annotations

import pytest

from portfolio_advisor.models.product import Holding, UserProfile
from portfolio_advisor.recommendations.insights import (
    analyze_diversification,
    analyze_performance,
    analyze_risk_distribution,
    derive_portfolio_insights,
)
from portfolio_advisor.taxonomy.product_taxonomy import InsightType, Severity


def _user(average_return: float = 8.7) -> UserProfile:
    return UserProfile(risk_appetite="Moderate", balance=5000.0, average_return=average_return)


def _balanced_four() -> list[Holding]:
    return [
        Holding(type="Equity Fund", risk="High"),
        Holding(type="Corporate Bond", risk="Low"),
        Holding(type="REIT", risk="Medium"),
        Holding(type="Government Bond", risk="Low"),
    ]


class TestDerivePortfolioInsights:
    def test_sample_holdings(self, sample_holdings):
        insights = derive_portfolio_insights(_user(), sample_holdings)
        assert [i.type for i in insights] == [
            InsightType.RISK_DISTRIBUTION,
            InsightType.DIVERSIFICATION,
        ]
        risk, div = insights
        assert risk.severity == Severity.MEDIUM
        assert risk.description.startswith("Your portfolio is High heavy.")
        assert risk.recommendations[0] == "Add more Low risk investments"
        assert div.severity == Severity.MEDIUM
        assert "REIT, Government Bond, Sector Fund" in div.description
        assert div.recommendations[0] == "Consider adding REIT investments"

    def test_four_holdings_always_get_rebalancing(self):
        insights = derive_portfolio_insights(_user(), _balanced_four())
        assert [i.type for i in insights] == [InsightType.REBALANCING]
        assert insights[0].severity == Severity.LOW

    @pytest.mark.parametrize("average_return", [-5.0, 2.0, 4.0, 12.0])
    def test_rebalancing_regardless_of_other_checks(self, average_return):
        holdings = [Holding(type="Crypto Fund", risk="High")] * 4
        types = [i.type for i in derive_portfolio_insights(_user(average_return), holdings)]
        assert InsightType.REBALANCING in types
        assert types[-1] == InsightType.REBALANCING

    def test_three_holdings_get_no_rebalancing(self, sample_holdings):
        types = [i.type for i in derive_portfolio_insights(_user(), sample_holdings)]
        assert InsightType.REBALANCING not in types

    def test_empty_holdings(self):
        insights = derive_portfolio_insights(_user(), [])
        assert len(insights) == 1
        div = insights[0]
        assert div.type == InsightType.DIVERSIFICATION
        assert div.severity == Severity.HIGH
        assert "Equity Fund, Corporate Bond, REIT" in div.description

    def test_all_checks_fire_in_order(self):
        holdings = [Holding(type="Crypto Fund", risk="High")] * 5
        insights = derive_portfolio_insights(_user(average_return=1.0), holdings)
        assert [i.type for i in insights] == [
            InsightType.RISK_DISTRIBUTION,
            InsightType.DIVERSIFICATION,
            InsightType.PERFORMANCE,
            InsightType.REBALANCING,
        ]
        assert insights[0].severity == Severity.HIGH
        assert insights[1].severity == Severity.HIGH
        assert insights[2].severity == Severity.HIGH

    def test_accepts_plain_mappings(self):
        user = {"riskAppetite": "Moderate", "averageReturn": 4.5}
        holdings = [{"type": "REIT", "risk": "Medium", "name": "Ignored extra"}]
        insights = derive_portfolio_insights(user, holdings)
        perf = next(i for i in insights if i.type == InsightType.PERFORMANCE)
        assert perf.severity == Severity.MEDIUM


class TestAnalyzeRiskDistribution:
    def test_empty_is_none(self):
        assert analyze_risk_distribution([]) is None

    def test_even_split_needs_nothing(self):
        holdings = [Holding(type="REIT", risk="Low"), Holding(type="REIT", risk="High")]
        result = analyze_risk_distribution(holdings)
        assert result is not None
        assert result.severity is None
        assert not result.needs_rebalancing

    def test_tie_goes_to_first_seen(self):
        holdings = [Holding(type="REIT", risk="Medium"), Holding(type="REIT", risk="Low")]
        assert analyze_risk_distribution(holdings).dominant_risk == "Medium"

    def test_exactly_eighty_percent_is_medium(self):
        holdings = [Holding(type="REIT", risk="Low")] * 4 + [Holding(type="REIT", risk="High")]
        result = analyze_risk_distribution(holdings)
        assert result.dominant_share == pytest.approx(0.8)
        assert result.severity == Severity.MEDIUM

    @pytest.mark.parametrize(
        "dominant, counter",
        [("High", "Low"), ("Low", "Medium"), ("Medium", "High"), ("Extreme", "High")],
    )
    def test_counter_risk_rotation(self, dominant, counter):
        holdings = [Holding(type="REIT", risk=dominant)] * 3
        result = analyze_risk_distribution(holdings)
        assert result.severity == Severity.HIGH
        assert result.recommended_risk == counter


class TestAnalyzeDiversification:
    def test_full_coverage(self):
        holdings = [
            Holding(type=t, risk="Low")
            for t in ("Equity Fund", "Corporate Bond", "REIT",
                      "Crypto Fund", "Government Bond", "Sector Fund")
        ]
        result = analyze_diversification(holdings)
        assert result.score == pytest.approx(1.0)
        assert result.missing_types == []

    def test_unknown_types_do_not_count(self):
        result = analyze_diversification([Holding(type="Hedge Fund", risk="High")])
        assert result.score == pytest.approx(0.0)
        assert len(result.missing_types) == 3


class TestAnalyzePerformance:
    @pytest.mark.parametrize(
        "average_return, severity",
        [(-2.0, Severity.HIGH), (2.99, Severity.HIGH), (3.0, Severity.MEDIUM),
         (4.99, Severity.MEDIUM), (5.0, None), (8.7, None)],
    )
    def test_thresholds(self, average_return, severity):
        assert analyze_performance(_user(average_return)).severity == severity
