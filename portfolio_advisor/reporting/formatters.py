"""
ASCII terminal formatters for CLI commands.

All formatters accept engine results (Recommendation, PortfolioInsight,
PasswordAssessment) and return plain multi-line strings suitable for
``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

from portfolio_advisor.models.password import PasswordAssessment
from portfolio_advisor.models.recommendation import PortfolioInsight, Recommendation

_SEVERITY_TAGS = {"High": "[HIGH]", "Medium": "[MED] ", "Low": "[LOW] "}


# ── Recommendations ───────────────────────────────────────────────────────────


def format_recommendations_table(recommendations: list[Recommendation]) -> str:
    """Format ranked recommendations as an ASCII table.

    Each row is followed by its reasons, indented::

        Rank  Product                         Type              Risk    Yield  Match
        ------------------------------------------------------------------------------
           1  Real Estate REIT                REIT              Medium   9.8%    87%
                - Perfect match for your moderate risk appetite
                - Attractive returns (9.8%)

    Args:
        recommendations: Output of ``recommend_products()``, best first.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Recommended Products ===")

    if not recommendations:
        lines.append("")
        lines.append("  (no product scored above the inclusion threshold)")
        return "\n".join(lines)

    header = (
        f"  {'Rank':>4}  {'Product':<30}  {'Type':<16}  "
        f"{'Risk':<6}  {'Yield':>6}  {'Match':>5}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for rank, rec in enumerate(recommendations, start=1):
        p = rec.product
        lines.append(
            f"  {rank:>4}  {p.name[:30]:<30}  {str(p.type)[:16]:<16}  "
            f"{str(p.risk)[:6]:<6}  {p.annual_yield:>5.1f}%  {rec.match_percentage:>4}%"
        )
        for reason in rec.reasons:
            lines.append(f"          - {reason}")

    return "\n".join(lines)


# ── Insights ──────────────────────────────────────────────────────────────────


def format_insights(insights: list[PortfolioInsight]) -> str:
    """Format portfolio insights as tagged blocks, in check order."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Portfolio Insights ===")

    if not insights:
        lines.append("")
        lines.append("  No issues found.")
        return "\n".join(lines)

    for insight in insights:
        tag = _SEVERITY_TAGS.get(insight.severity.value, f"[{insight.severity.value}]")
        lines.append("")
        lines.append(f"  {tag} {insight.title}")
        lines.append(f"         {insight.description}")
        for action in insight.recommendations:
            lines.append(f"         * {action}")

    return "\n".join(lines)


# ── Password ──────────────────────────────────────────────────────────────────


def format_password_assessment(assessment: PasswordAssessment) -> str:
    """Format a password verdict with a score bar and suggestions.

    The password itself is never included.
    """
    bar = "#" * assessment.score + "." * (5 - assessment.score)
    lines = [
        "",
        f"  Strength: [{bar}] {assessment.score}/5  {assessment.feedback}",
        f"  Strong:   {'yes' if assessment.is_strong else 'no'}",
    ]
    if assessment.suggestions:
        lines.append("  Suggestions:")
        lines.extend(f"    - {s}" for s in assessment.suggestions)
    return "\n".join(lines)
