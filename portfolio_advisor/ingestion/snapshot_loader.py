"""
Snapshot loader: JSON files → validated engine inputs.

File shapes
-----------
catalog  : array of product objects (``config/catalog/products.json``)
profile  : one user object          (``config/samples/profile.json``)
holdings : array of holding objects (``config/samples/holdings.json``);
           only ``type`` and ``risk`` are required, extra keys are ignored.

Keys may be snake_case or the camelCase spelling used by the web app
(``minInvestment``, ``riskAppetite``, ``yield``).

Validation rules
----------------
- A missing file raises ``FileNotFoundError``.
- Invalid JSON, bytes that are not UTF-8, an unreadable path (e.g. a
  directory) or the wrong top-level shape raise ``SnapshotError``.
- Per-record validation errors are collected and raised together as one
  ``SnapshotError`` (first five shown).
- Duplicate product ids in a catalog are rejected.

Usage
-----
    from portfolio_advisor.ingestion.snapshot_loader import load_catalog

    products = load_catalog(Path("config/catalog/products.json"))
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from portfolio_advisor.models.product import Holding, Product, UserProfile

logger = logging.getLogger(__name__)

_MAX_REPORTED_ERRORS = 5

ModelT = TypeVar("ModelT", bound=BaseModel)


class SnapshotError(ValueError):
    """A snapshot file could not be parsed or failed validation."""


def load_catalog(path: Path) -> list[Product]:
    """Load a product catalog.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        SnapshotError: On malformed JSON, invalid records or duplicate ids.
    """
    products = _load_records(path, Product)

    counts = Counter(p.id for p in products)
    duplicates = sorted(pid for pid, n in counts.items() if n > 1)
    if duplicates:
        raise SnapshotError(f"{path}: duplicate product id(s): {', '.join(duplicates)}")

    logger.info("Loaded %d product(s) from %s", len(products), path)
    return products


def load_holdings(path: Path) -> list[Holding]:
    """Load a holdings list (may be empty)."""
    holdings = _load_records(path, Holding)
    logger.info("Loaded %d holding(s) from %s", len(holdings), path)
    return holdings


def load_profile(path: Path) -> UserProfile:
    """Load a single user profile object."""
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise SnapshotError(f"{path}: profile file must contain a JSON object.")
    try:
        profile = UserProfile.model_validate(raw)
    except ValidationError as exc:
        raise SnapshotError(f"{path}: invalid profile:\n{exc}") from exc
    logger.info("Loaded profile from %s", path)
    return profile


# ── Helpers ───────────────────────────────────────────────────────────────────

def _read_json(path: Path) -> Any:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"{path}: JSON parse error: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SnapshotError(f"{path}: not valid UTF-8: {exc}") from exc
    except FileNotFoundError:
        raise
    except OSError as exc:
        raise SnapshotError(f"{path}: cannot read file: {exc}") from exc


def _load_records(path: Path, model: type[ModelT]) -> list[ModelT]:
    raw = _read_json(path)
    if not isinstance(raw, list):
        raise SnapshotError(f"{path}: file must contain a JSON array.")

    records: list[ModelT] = []
    errors: list[tuple[int, str]] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            errors.append((i, "record is not a JSON object"))
            continue
        try:
            records.append(model.model_validate(item))
        except ValidationError as exc:
            errors.append((i, str(exc)))

    if errors:
        lines = [f"{path}: {len(errors)} {model.__name__} record(s) failed validation:"]
        lines += [f"  #{idx}: {msg}" for idx, msg in errors[:_MAX_REPORTED_ERRORS]]
        if len(errors) > _MAX_REPORTED_ERRORS:
            lines.append(f"  ... and {len(errors) - _MAX_REPORTED_ERRORS} more.")
        raise SnapshotError("\n".join(lines))

    return records
