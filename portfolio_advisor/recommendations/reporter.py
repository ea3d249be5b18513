"""
Recommendation report writer: CSV and JSON output for ranked
recommendations and portfolio insights.

All functions are pure I/O: they consume in-memory engine results and
write human-readable and machine-readable files.

Output files (written by the ``recommend`` / ``insights`` CLI commands)
-----------------------------------------------------------------------
  data/outputs/
    recommendations_{date}.json   -- ranked recommendations, structured
    recommendations_{date}.csv    -- same data, one row per product
    insights_{date}.json          -- portfolio insights

Each write is logged at INFO with ``report_path`` and ``rows`` attached as
structured fields (emitted as JSON keys when ``json_format = true``).
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from portfolio_advisor.models.recommendation import PortfolioInsight, Recommendation

logger = logging.getLogger(__name__)


def recommendation_to_dict(rank: int, rec: Recommendation) -> dict[str, Any]:
    """Flatten one Recommendation into a JSON-serialisable dict."""
    return {
        "rank":             rank,
        "product_id":       rec.product.id,
        "product_name":     rec.product.name,
        "product_type":     rec.product.type,
        "risk":             rec.product.risk,
        "yield_pct":        rec.product.annual_yield,
        "min_investment":   rec.product.min_investment,
        "score":            round(rec.score, 4),
        "match_percentage": rec.match_percentage,
        "reasons":          list(rec.reasons),
        "components":       {k: round(v, 4) for k, v in rec.components.as_dict().items()},
    }


def write_recommendation_json(
    recommendations: list[Recommendation],
    output_dir: Path,
    run_date: date | None = None,
) -> Path:
    """Write ranked recommendations to a JSON file.

    Args:
        recommendations: Output of ``recommend_products()``, best first.
        output_dir:      Directory to write the file (created if missing).
        run_date:        Date label for the filename. Defaults to today.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"recommendations_{run_date}.json"

    payload = {
        "generated_at":    datetime.now(tz=timezone.utc).isoformat(),
        "count":           len(recommendations),
        "recommendations": [
            recommendation_to_dict(rank, rec)
            for rank, rec in enumerate(recommendations, start=1)
        ],
    }
    json_path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")

    logger.info(
        "Recommendation JSON written: %s (%d rows)", json_path, len(recommendations),
        extra={"report_path": str(json_path), "rows": len(recommendations)},
    )
    return json_path


def write_recommendation_csv(
    recommendations: list[Recommendation],
    output_dir: Path,
    run_date: date | None = None,
) -> Path:
    """Write ranked recommendations to a CSV file.

    Columns: rank, product_id, product_name, product_type, risk, yield_pct,
             min_investment, score, match_percentage, reasons.
    Reasons are joined with ``"; "``.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"recommendations_{run_date}.csv"

    fieldnames = [
        "rank", "product_id", "product_name", "product_type", "risk",
        "yield_pct", "min_investment", "score", "match_percentage", "reasons",
    ]

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
        writer.writeheader()
        for rank, rec in enumerate(recommendations, start=1):
            row = recommendation_to_dict(rank, rec)
            row["reasons"] = "; ".join(row["reasons"])
            writer.writerow(row)

    logger.info(
        "Recommendation CSV written: %s (%d rows)", csv_path, len(recommendations),
        extra={"report_path": str(csv_path), "rows": len(recommendations)},
    )
    return csv_path


def write_insights_json(
    insights: list[PortfolioInsight],
    output_dir: Path,
    run_date: date | None = None,
) -> Path:
    """Write portfolio insights to a JSON file, preserving check order."""
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"insights_{run_date}.json"

    payload = {
        "generated_at": datetime.now(tz=timezone.utc).isoformat(),
        "count":        len(insights),
        "insights":     [insight.model_dump(mode="json") for insight in insights],
    }
    json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    logger.info(
        "Insights JSON written: %s (%d insights)", json_path, len(insights),
        extra={"report_path": str(json_path), "rows": len(insights)},
    )
    return json_path
