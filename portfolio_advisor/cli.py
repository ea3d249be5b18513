"""
Portfolio Advisor CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate inputs (JSON snapshots, options).
  4. Run the engine function.
  5. Report result to stdout (table or ``--json``), optionally write files.

Install and run::

    pip install -e .
    portfolio-advisor --help
    portfolio-advisor validate-config
    portfolio-advisor recommend --profile config/samples/profile.json
    portfolio-advisor insights --holdings config/samples/holdings.json
    portfolio-advisor describe --product-id 3
    portfolio-advisor check-password --first-name John
    portfolio-advisor generate-password --length 16
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="portfolio-advisor",
    help="Product recommendations, portfolio insights and password checks.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from portfolio_advisor.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from portfolio_advisor.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_or_exit(loader, path: Path):
    """Run a snapshot loader, converting loader errors into exit code 1."""
    from portfolio_advisor.ingestion.snapshot_loader import SnapshotError

    try:
        return loader(path)
    except (FileNotFoundError, SnapshotError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Catalog file:     {config.data.catalog_file}")
    typer.echo(f"  Output dir:       {config.data.output_dir}")
    typer.echo(f"  Top N:            {config.recommendations.top_n}")
    typer.echo(f"  Min score:        {config.recommendations.min_score:.2f}")
    typer.echo(f"  Password length:  {config.password.generated_length}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("recommend")
def recommend(
    catalog_file: Optional[str] = typer.Option(
        None, "--catalog", help="Product catalog JSON (default: config.data.catalog_file).",
    ),
    profile_file: Optional[str] = typer.Option(
        None, "--profile", help="User profile JSON (default: config.data.profile_file).",
    ),
    holdings_file: Optional[str] = typer.Option(
        None, "--holdings", help="Holdings JSON (default: config.data.holdings_file).",
    ),
    top_n: Optional[int] = typer.Option(
        None, "--top-n", min=1, help="Override config.recommendations.top_n.",
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", help="Also write JSON + CSV reports into this directory.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Rank the product catalog for a user profile and existing holdings."""
    from portfolio_advisor.ingestion.snapshot_loader import (
        load_catalog,
        load_holdings,
        load_profile,
    )
    from portfolio_advisor.recommendations.ranker import recommend_products
    from portfolio_advisor.recommendations.reporter import (
        recommendation_to_dict,
        write_recommendation_csv,
        write_recommendation_json,
    )
    from portfolio_advisor.reporting.formatters import format_recommendations_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    catalog = _load_or_exit(load_catalog, Path(catalog_file or config.data.catalog_file))
    profile = _load_or_exit(load_profile, Path(profile_file or config.data.profile_file))
    holdings = _load_or_exit(load_holdings, Path(holdings_file or config.data.holdings_file))

    recs = recommend_products(
        catalog,
        profile,
        holdings,
        top_n=top_n or config.recommendations.top_n,
        min_score=config.recommendations.min_score,
    )

    if as_json:
        typer.echo(json.dumps(
            [recommendation_to_dict(rank, rec) for rank, rec in enumerate(recs, start=1)],
            indent=2,
        ))
    else:
        typer.echo(format_recommendations_table(recs))

    if output_dir:
        out = Path(output_dir)
        json_path = write_recommendation_json(recs, out)
        csv_path = write_recommendation_csv(recs, out)
        typer.echo(f"  Written: {json_path}", err=True)
        typer.echo(f"  Written: {csv_path}", err=True)


@app.command("insights")
def insights(
    profile_file: Optional[str] = typer.Option(
        None, "--profile", help="User profile JSON (default: config.data.profile_file).",
    ),
    holdings_file: Optional[str] = typer.Option(
        None, "--holdings", help="Holdings JSON (default: config.data.holdings_file).",
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", help="Also write an insights JSON report into this directory.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of text."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Derive portfolio insights (risk mix, diversification, performance, rebalancing)."""
    from portfolio_advisor.ingestion.snapshot_loader import load_holdings, load_profile
    from portfolio_advisor.recommendations.insights import derive_portfolio_insights
    from portfolio_advisor.recommendations.reporter import write_insights_json
    from portfolio_advisor.reporting.formatters import format_insights

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    profile = _load_or_exit(load_profile, Path(profile_file or config.data.profile_file))
    holdings = _load_or_exit(load_holdings, Path(holdings_file or config.data.holdings_file))

    found = derive_portfolio_insights(profile, holdings)

    if as_json:
        typer.echo(json.dumps([i.model_dump(mode="json") for i in found], indent=2))
    else:
        typer.echo(format_insights(found))

    if output_dir:
        path = write_insights_json(found, Path(output_dir))
        typer.echo(f"  Written: {path}", err=True)


@app.command("describe")
def describe(
    product_id: Optional[str] = typer.Option(
        None, "--product-id", help="Describe only this product (default: all).",
    ),
    catalog_file: Optional[str] = typer.Option(
        None, "--catalog", help="Product catalog JSON (default: config.data.catalog_file).",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Print the catalog description for one or all products."""
    from portfolio_advisor.ingestion.snapshot_loader import load_catalog
    from portfolio_advisor.recommendations.descriptions import describe_product

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    catalog = _load_or_exit(load_catalog, Path(catalog_file or config.data.catalog_file))
    if product_id is not None:
        catalog = [p for p in catalog if p.id == product_id]
        if not catalog:
            typer.echo(f"[ERROR] Product not found: {product_id}", err=True)
            raise typer.Exit(code=1)

    for product in catalog:
        typer.echo(f"{product.name} ({product.type})")
        typer.echo(f"  {describe_product(product)}")
        typer.echo("")


@app.command("check-password")
def check_password(
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True,
        help="Password to check (prompted for when omitted).",
    ),
    first_name: Optional[str] = typer.Option(None, "--first-name"),
    last_name: Optional[str] = typer.Option(None, "--last-name"),
    email: Optional[str] = typer.Option(None, "--email"),
    require_strong: bool = typer.Option(
        False, "--require-strong", help="Exit with code 2 if the password is not strong.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of text."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Score a password (0–5) and list ways to strengthen it."""
    from portfolio_advisor.models.password import IdentityHints
    from portfolio_advisor.reporting.formatters import format_password_assessment
    from portfolio_advisor.security.password_strength import analyze_strength

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    identity = IdentityHints(first_name=first_name, last_name=last_name, email=email)
    assessment = analyze_strength(password, identity)

    if as_json:
        typer.echo(json.dumps(assessment.model_dump(), indent=2))
    else:
        typer.echo(format_password_assessment(assessment))

    if require_strong and not assessment.is_strong:
        raise typer.Exit(code=2)


@app.command("generate-password")
def generate_password(
    length: Optional[int] = typer.Option(
        None, "--length", "-n", help="Password length (default: config.password.generated_length).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Seed for reproducible output (testing only).",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Generate a password containing upper, lower, digit and symbol characters."""
    from portfolio_advisor.security.password_generator import generate_strong_password

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    rng = random.Random(seed) if seed is not None else None
    try:
        typer.echo(generate_strong_password(
            length if length is not None else config.password.generated_length, rng=rng
        ))
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
